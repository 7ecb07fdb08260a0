# grafico_fluxo.py
from pathlib import Path

from matplotlib.figure import Figure


def criar_figura_fluxo(fluxos, titulo="Fluxo de Caixa Mensal"):
    """
    Gráfico de linha do fluxo consolidado, um ponto por mês (M1..M24).
    Retorna a Figure sem depender de pyplot, para poder ser embutida no Tk.
    """
    valores = list(fluxos.values if hasattr(fluxos, "values") else fluxos)
    meses = [f"M{i + 1}" for i in range(len(valores))]

    fig = Figure(figsize=(8, 4))
    ax = fig.add_subplot(111)
    ax.plot(meses, valores, marker="o", label="Fluxo Mensal")
    ax.set_title(titulo)
    ax.tick_params(axis="x", rotation=90)
    ax.legend()
    fig.tight_layout()
    return fig


def salvar_grafico_fluxo(fluxos, out_path=None):
    # Default estable: saidas/graficos
    path = Path(out_path) if out_path else Path("saidas") / "graficos" / "fluxo_mensal.png"
    path.parent.mkdir(parents=True, exist_ok=True)

    fig = criar_figura_fluxo(fluxos)
    fig.savefig(path, dpi=160)
    return path
