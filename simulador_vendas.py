# Simulador de Vendas Imobiliárias
# Versão 1.0
# Descrição: Projeta o fluxo de caixa de 24 meses das unidades de um empreendimento
# (entrada, ato, intermediária e chaves), com desconto por fase de venda e correção
# por INCC/IPCA, e calcula receita total, TIR, payback e ROI.

import numpy as np
import pandas as pd
import copy

HORIZONTE_MESES = 24
MES_CHAVES = 23

# ==============================================================================
# 1. PARÂMETROS DA SIMULAÇÃO
# ==============================================================================
configuracao = {
    "incc": 0.0045,
    "ipca": 0.005,
    "entrada_pct": 30,
    "entrada_meses": 6,
    "ato_pct": 0,
    "intermediaria_pct": 0,
    "intermediaria_mes": 6,
    "chaves_pct": 0,
    "meses_pre_lancamento": 2,
    "meses_lancamento": 3,
    "desconto_pre": 10,
    "desconto_lancamento": 5,
}

unidades = [
    {"id": 1, "descricao": "Apto 101", "valor": 300_000, "categoria": "Apto", "status": "Disponível"},
    {"id": 2, "descricao": "Apto 102", "valor": 320_000, "categoria": "Apto", "status": "Disponível"},
    {"id": 3, "descricao": "Cobertura 201", "valor": 500_000, "categoria": "Cobertura", "status": "Disponível"},
]

CAMPOS_MES = ("entrada_meses", "intermediaria_mes", "meses_pre_lancamento", "meses_lancamento")


class ParametroInvalidoError(ValueError):
    """Parâmetro que levaria o cálculo a um índice de mês inválido ou divisão por zero."""


def parse_num(valor, padrao=0.0):
    """
    Converte um valor vindo de formulário em número.
    Retorna `padrao` se o valor não puder ser interpretado (inclui NaN).
    """
    try:
        numero = float(valor)
    except (TypeError, ValueError):
        return padrao
    if np.isnan(numero):
        return padrao
    return numero


def montar_configuracao(valores=None):
    """
    Cria uma configuração completa a partir dos padrões, aplicando `valores` por cima.

    Cada valor passa por `parse_num` usando o padrão da própria chave como fallback.
    Campos de mês inteiros são guardados como int.
    """
    cfg = copy.deepcopy(configuracao)
    for chave, valor in (valores or {}).items():
        if chave not in cfg:
            raise ParametroInvalidoError(f"Parâmetro desconhecido: '{chave}'")
        numero = parse_num(valor, configuracao[chave])
        if chave in CAMPOS_MES and float(numero).is_integer():
            numero = int(numero)
        cfg[chave] = numero
    return cfg


def _mes_inteiro(cfg, chave):
    valor = cfg[chave]
    if not float(valor).is_integer():
        raise ParametroInvalidoError(f"'{chave}' deve ser um número inteiro de meses (recebido {valor})")
    return int(valor)


def validar_configuracao(cfg):
    """
    Garante que os meses configurados caem dentro do horizonte de 24 meses.
    Levanta ParametroInvalidoError em vez de deixar o fluxo receber NaN ou índices fora do vetor.
    """
    entrada_meses = _mes_inteiro(cfg, "entrada_meses")
    if not 1 <= entrada_meses <= MES_CHAVES:
        raise ParametroInvalidoError(
            f"'entrada_meses' deve estar entre 1 e {MES_CHAVES} (recebido {entrada_meses})"
        )

    if cfg["intermediaria_pct"] > 0:
        mes_inter = _mes_inteiro(cfg, "intermediaria_mes")
        if not 0 <= mes_inter <= MES_CHAVES:
            raise ParametroInvalidoError(
                f"'intermediaria_mes' deve estar entre 0 e {MES_CHAVES} (recebido {mes_inter})"
            )

# ==============================================================================
# 2. POLÍTICA DE DESCONTO E CORREÇÃO MONETÁRIA
# ==============================================================================

def aplicar_desconto(valor_base, indice_fase, cfg):
    """
    Preço da unidade conforme a fase de venda:
      - indice_fase < meses_pre_lancamento               -> desconto_pre
      - indice_fase < pre_lancamento + meses_lancamento  -> desconto_lancamento
      - demais                                            -> valor cheio (pós-lançamento)
    """
    pre = cfg["meses_pre_lancamento"]
    lancamento = cfg["meses_lancamento"]

    if indice_fase < pre:
        return valor_base * (1 - cfg["desconto_pre"] / 100)

    if indice_fase < pre + lancamento:
        return valor_base * (1 - cfg["desconto_lancamento"] / 100)

    return valor_base


def fase_da_unidade(indice_fase, cfg):
    pre = cfg["meses_pre_lancamento"]
    if indice_fase < pre:
        return "Pré-lançamento"
    if indice_fase < pre + cfg["meses_lancamento"]:
        return "Lançamento"
    return "Pós-lançamento"


def corrigir_valor(valor_inicial, mes, taxa):
    """Correção composta: valor_inicial * (1 + taxa) ** mes."""
    return valor_inicial * (1 + taxa) ** mes


def corrigir_por_incc(valor_inicial, mes, cfg):
    return corrigir_valor(valor_inicial, mes, cfg["incc"])


def corrigir_por_ipca(valor_inicial, mes, cfg):
    return corrigir_valor(valor_inicial, mes, cfg["ipca"])

# ==============================================================================
# 3. FLUXO DE CAIXA POR UNIDADE E CONSOLIDADO
# ==============================================================================

def calcular_fluxo_unidade(unidade, indice_fase, cfg):
    """
    Monta o fluxo de 24 meses de uma unidade.

    Mês 0 recebe o ato, meses 1..entrada_meses a entrada parcelada, o mês da
    intermediária recebe o valor corrigido pelo INCC e o mês 23 as chaves
    corrigidas pelo IPCA. Parcelas no mesmo mês se somam.
    """
    validar_configuracao(cfg)
    entrada_meses = int(cfg["entrada_meses"])

    fluxo = np.zeros(HORIZONTE_MESES)

    preco_base = aplicar_desconto(unidade["valor"], indice_fase, cfg)

    entrada_total = (cfg["entrada_pct"] / 100) * preco_base
    pag_ato = (cfg["ato_pct"] / 100) * preco_base
    pag_intermediaria = (cfg["intermediaria_pct"] / 100) * preco_base
    pag_chaves = (cfg["chaves_pct"] / 100) * preco_base

    entrada_mensal = entrada_total / entrada_meses

    fluxo[0] += pag_ato

    for mes in range(1, entrada_meses + 1):
        fluxo[mes] += entrada_mensal

    if cfg["intermediaria_pct"] > 0:
        mes_inter = int(cfg["intermediaria_mes"])
        fluxo[mes_inter] += corrigir_por_incc(pag_intermediaria, mes_inter, cfg)

    fluxo[MES_CHAVES] += corrigir_por_ipca(pag_chaves, MES_CHAVES, cfg)

    return fluxo


def agregar_fluxos(fluxos):
    """Soma mês a mês os fluxos das unidades. Lista vazia -> 24 zeros."""
    total = np.zeros(HORIZONTE_MESES)
    for fluxo in fluxos:
        valores = np.asarray(fluxo, dtype=float)
        if valores.shape != (HORIZONTE_MESES,):
            raise ParametroInvalidoError(
                f"Fluxo com {valores.size} meses; esperado {HORIZONTE_MESES}"
            )
        total = total + valores
    return total

# ==============================================================================
# 4. MÉTRICAS FINANCEIRAS
# ==============================================================================

def _vpl_na_taxa(fluxos, taxa):
    """VPL dos fluxos mensais descontados a `taxa` (taxa > -1)."""
    valores = np.asarray(fluxos, dtype=float)
    if valores.size == 0:
        return 0.0
    periodos = np.arange(valores.size)
    return float(np.sum(valores / (1.0 + taxa) ** periodos))


def _resolver_tir(fluxos, taxa_inicial=0.01, passo=0.01, tol=1e-6, maxiter=200, piso=-0.99):
    """
    Busca por passo fixo: sobe a taxa quando o VPL é positivo e desce quando é
    negativo, até |VPL| < tol ou esgotar as iterações.

    Returns:
      (taxa, convergiu, iteracoes, vpl)
    """
    taxa = taxa_inicial
    vpl = None
    for i in range(maxiter):
        vpl = _vpl_na_taxa(fluxos, taxa)
        if abs(vpl) < tol:
            return taxa, True, i + 1, vpl
        taxa += passo if vpl > 0 else -passo
        taxa = max(taxa, piso)
    return taxa, False, maxiter, vpl


def TIR_mensal(fluxos, return_structure=False):
    """
    Calcula a TIR mensal aproximada do fluxo.

    If return_structure is True return a dict with metadata (convergence,
    iterations, annual equivalent). Otherwise return the monthly rate (float).
    A busca não converger não é erro: a última taxa é devolvida e `converged`
    fica False.
    """
    valores = fluxos.values if hasattr(fluxos, "values") else list(fluxos)

    tir_m, convergiu, iteracoes, vpl = _resolver_tir(valores)
    result = {
        "tir_mensal": tir_m,
        "tir_anual_equivalente": (1.0 + tir_m) ** 12.0 - 1.0,
        "cash_flows": valores,
        "converged": convergiu,
        "iteracoes": iteracoes,
        "vpl_final": vpl,
        "notes": "" if convergiu else "Busca da TIR atingiu o limite de iterações sem convergir",
    }
    return result if return_structure else tir_m


def calcular_payback(fluxos):
    """
    Primeiro mês em que o acumulado fica >= 0.
    Retorna len(fluxos) quando o acumulado nunca fica positivo (horizonte excedido).
    """
    valores = fluxos.values if hasattr(fluxos, "values") else list(fluxos)
    acumulado = 0.0
    for mes, valor in enumerate(valores):
        acumulado += valor
        if acumulado >= 0:
            return mes
    return len(valores)


def calcular_roi(fluxos):
    """
    ROI (%) = soma dos fluxos / maior saída mensal (em módulo) * 100, com 2 casas.
    Sem nenhum mês negativo o ROI é 0.
    """
    valores = np.asarray(fluxos, dtype=float)
    if valores.size == 0:
        return 0.0
    total = valores.sum()
    investido = -valores.min()
    if investido <= 0:
        return 0.0
    return round(float(total / investido * 100), 2)

# ==============================================================================
# 5. SIMULAÇÃO COMPLETA
# ==============================================================================

def _indice_fase(unidade, posicao):
    return unidade.get("fase", posicao)


def tabela_unidades(lista_unidades, cfg):
    linhas = []
    for posicao, u in enumerate(lista_unidades):
        fase = _indice_fase(u, posicao)
        linhas.append({
            "ID": u["id"],
            "Unidade": u["descricao"],
            "Categoria": u["categoria"],
            "Status": u["status"],
            "Valor Base": u["valor"],
            "Fase": fase_da_unidade(fase, cfg),
            "Valor Fase": aplicar_desconto(u["valor"], fase, cfg),
        })
    return pd.DataFrame(linhas, columns=["ID", "Unidade", "Categoria", "Status", "Valor Base", "Fase", "Valor Fase"])


def executar_simulacao(lista_unidades, cfg=None):
    """
    Executa a simulação para todas as unidades.

    A fase de cada unidade vem de `unidade["fase"]`; sem esse campo usa-se a
    posição da unidade na lista.

    Returns:
      dict com os fluxos por unidade (DataFrame), o fluxo consolidado (Series)
      e as métricas: receita_total, tir_mensal, tir_anual, tir_convergiu,
      payback, payback_excedido, roi e tabela_unidades.
    """
    if cfg is None:
        cfg = montar_configuracao()
    validar_configuracao(cfg)

    fluxos = []
    for posicao, u in enumerate(lista_unidades):
        fluxos.append(calcular_fluxo_unidade(u, _indice_fase(u, posicao), cfg))

    meses = list(range(HORIZONTE_MESES))
    df_fluxos = pd.DataFrame(
        np.array(fluxos).reshape(len(fluxos), HORIZONTE_MESES),
        index=pd.Index([u["id"] for u in lista_unidades], name="ID"),
        columns=meses,
    )
    fluxo_total = pd.Series(agregar_fluxos(fluxos), index=meses, name="Fluxo Mensal")

    tir = TIR_mensal(fluxo_total, return_structure=True)
    payback = calcular_payback(fluxo_total)

    return {
        "fluxos_unidades": df_fluxos,
        "fluxo_total": fluxo_total,
        "receita_total": float(fluxo_total.sum()),
        "tir_mensal": tir["tir_mensal"],
        "tir_anual": tir["tir_anual_equivalente"],
        "tir_convergiu": tir["converged"],
        "payback": payback,
        "payback_excedido": payback >= HORIZONTE_MESES,
        "roi": calcular_roi(fluxo_total),
        "tabela_unidades": tabela_unidades(lista_unidades, cfg),
    }

# ==============================================================================
# 6. ANÁLISE DE SENSIBILIDADE
# ==============================================================================

VARIAVEIS_SENSIBILIDADE = {
    "INCC": "incc",
    "IPCA": "ipca",
    "Desconto Pré-lançamento": "desconto_pre",
    "Desconto Lançamento": "desconto_lancamento",
}


def analise_de_sensibilidade(lista_unidades, cfg_base, variacoes=(-0.20, -0.10, 0.0, 0.10, 0.20)):
    resultados = []
    for nome_variavel, chave in VARIAVEIS_SENSIBILIDADE.items():
        for variacao in variacoes:
            cfg_teste = copy.deepcopy(cfg_base)
            cfg_teste[chave] = cfg_base[chave] * (1 + variacao)

            sim = executar_simulacao(lista_unidades, cfg_teste)
            resultados.append({
                "Variável": nome_variavel,
                "Variação": f"{variacao:+.0%}",
                "Receita Total": sim["receita_total"],
                "TIR Mensal": sim["tir_mensal"],
                "ROI": sim["roi"],
            })

    return pd.DataFrame(resultados)

# ==============================================================================
# 7. RELATÓRIO NO CONSOLE
# ==============================================================================

def formatar_moeda(valor):
    """Formata em reais no padrão pt-BR: R$ 1.234,56"""
    texto = f"{abs(valor):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
    return f"-R$ {texto}" if valor < 0 else f"R$ {texto}"


def imprimir_resumo(resultado):
    print("\n--- RESUMO DA SIMULAÇÃO ---")
    print(resultado["tabela_unidades"].to_string(index=False, formatters={
        "Valor Base": formatar_moeda,
        "Valor Fase": formatar_moeda,
    }))
    print(f"\nReceita Total: {formatar_moeda(resultado['receita_total'])}")
    nota_tir = "" if resultado["tir_convergiu"] else " (não convergiu)"
    print(f"TIR Mensal: {resultado['tir_mensal']:.2%}{nota_tir}")
    print(f"TIR Anual Equivalente: {resultado['tir_anual']:.2%}")
    if resultado["payback_excedido"]:
        print("Payback: além do horizonte de 24 meses")
    else:
        print(f"Payback: {resultado['payback']} meses")
    print(f"ROI: {resultado['roi']:.2f}%")

    print("\n--- FLUXO MENSAL CONSOLIDADO ---")
    for mes, valor in resultado["fluxo_total"].items():
        if valor != 0:
            print(f"  M{mes + 1:>2}: {formatar_moeda(valor)}")


def imprimir_sensibilidade(df_sensibilidade):
    print("\n" + "=" * 70)
    print(" ANÁLISE DE SENSIBILIDADE")
    print("=" * 70)

    df_receita = df_sensibilidade.pivot(index="Variável", columns="Variação", values="Receita Total")
    df_tir = df_sensibilidade.pivot(index="Variável", columns="Variação", values="TIR Mensal")

    # pivot ordena "+10%" antes de "-10%"; mantém a ordem das variações
    ordem = list(dict.fromkeys(df_sensibilidade["Variação"]))
    df_receita, df_tir = df_receita[ordem], df_tir[ordem]

    print("\n--- Sensibilidade da Receita Total ---")
    print(df_receita.to_string(float_format="{:,.0f}".format))

    print("\n--- Sensibilidade da TIR Mensal ---")
    print(df_tir.to_string(float_format="{:.2%}".format))
    print("=" * 70)


if __name__ == "__main__":
    print("=" * 70)
    print(" SIMULADOR DE VENDAS IMOBILIÁRIAS v1.0")
    print("=" * 70)

    cfg = montar_configuracao()
    resultado = executar_simulacao(unidades, cfg)
    imprimir_resumo(resultado)

    imprimir_sensibilidade(analise_de_sensibilidade(unidades, cfg))
