#!/usr/bin/env python3
"""
Interactive script to build a sales simulation from the console.
Guides you through the units and the commercial parameters, then prints the report.
"""
import simulador_vendas as sv

def get_input(prompt, default=None, input_type=str):
    """Helper to get user input with default value."""
    if default is not None:
        prompt = f"{prompt} [{default}]: "
    else:
        prompt = f"{prompt}: "

    value = input(prompt).strip()

    if not value and default is not None:
        return default

    if input_type == int:
        return int(value)
    elif input_type == float:
        return float(value)
    else:
        return value

def criar_unidades():
    """Interactive unit list."""
    print("\n--- UNIDADES ---")
    lista = []
    quantidade = get_input("Quantas unidades?", len(sv.unidades), int)

    for i in range(quantidade):
        modelo = sv.unidades[i] if i < len(sv.unidades) else {
            "descricao": f"Unidade {i+1}", "valor": 300_000, "categoria": "Apto", "status": "Disponível"
        }
        print(f"\nUnidade #{i+1}:")
        unidade = {
            "id": i + 1,
            "descricao": get_input("  Descrição", modelo["descricao"]),
            "valor": get_input("  Valor base (R$)", modelo["valor"], float),
            "categoria": get_input("  Categoria", modelo["categoria"]),
            "status": get_input("  Status", modelo["status"]),
        }
        fase = get_input("  Fase de venda (vazio = posição na lista)", "")
        if fase != "":
            unidade["fase"] = int(fase)
        lista.append(unidade)

    return lista

def criar_configuracao():
    """Interactive configuration. Rates are asked as % per month."""
    padrao = sv.configuracao

    print("\n--- ÍNDICES DE CORREÇÃO ---")
    valores = {
        "incc": get_input("INCC (% ao mês)", padrao["incc"] * 100, float) / 100,
        "ipca": get_input("IPCA (% ao mês)", padrao["ipca"] * 100, float) / 100,
    }

    print("\n--- CONDIÇÕES DE PAGAMENTO ---")
    valores["entrada_pct"] = get_input("Entrada (%)", padrao["entrada_pct"], float)
    valores["entrada_meses"] = get_input("Parcelas da entrada (meses)", padrao["entrada_meses"], int)
    valores["ato_pct"] = get_input("Ato (%)", padrao["ato_pct"], float)
    valores["intermediaria_pct"] = get_input("Intermediária (%)", padrao["intermediaria_pct"], float)
    valores["intermediaria_mes"] = get_input("Mês da intermediária", padrao["intermediaria_mes"], int)
    valores["chaves_pct"] = get_input("Chaves (%)", padrao["chaves_pct"], float)

    print("\n--- FASES DE VENDA ---")
    valores["meses_pre_lancamento"] = get_input("Pré-lançamento (fases)", padrao["meses_pre_lancamento"], int)
    valores["meses_lancamento"] = get_input("Lançamento (fases)", padrao["meses_lancamento"], int)
    valores["desconto_pre"] = get_input("Desconto pré-lançamento (%)", padrao["desconto_pre"], float)
    valores["desconto_lancamento"] = get_input("Desconto lançamento (%)", padrao["desconto_lancamento"], float)

    return sv.montar_configuracao(valores)

def main():
    """Main function."""
    print("\n" + "=" * 60)
    print("SIMULADOR DE VENDAS - NOVA SIMULAÇÃO")
    print("=" * 60)

    try:
        lista = criar_unidades()
        cfg = criar_configuracao()
        resultado = sv.executar_simulacao(lista, cfg)
    except ValueError as e:
        print(f"\n✗ Erro na simulação: {e}")
        return None

    sv.imprimir_resumo(resultado)

    sensibilidade = get_input("\nExecutar análise de sensibilidade? (s/n)", "n")
    if sensibilidade.lower() == 's':
        sv.imprimir_sensibilidade(sv.analise_de_sensibilidade(lista, cfg))

    return resultado

if __name__ == "__main__":
    main()
