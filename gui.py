import customtkinter as ctk
from tkinter import ttk
from tkinter import messagebox
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
import simulador_vendas as sv
import grafico_fluxo
import pandas as pd

# --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- ---
# JANELA DE DIÁLOGO PARA ADICIONAR/EDITAR UNIDADES
# --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- ---
class UnidadeDialog(ctk.CTkToplevel):
    def __init__(self, parent, existing_item=None):
        super().__init__(parent)
        self.transient(parent)
        self.title("Unidade")
        self.geometry("420x360")
        self.result = None

        campos = [
            ("id", "ID:"),
            ("descricao", "Descrição:"),
            ("valor", "Valor Base (R$):"),
            ("categoria", "Categoria:"),
            ("status", "Status:"),
            ("fase", "Fase (vazio = posição):"),
        ]
        self.entries = {}
        for row, (chave, texto) in enumerate(campos):
            ctk.CTkLabel(self, text=texto).grid(row=row, column=0, padx=20, pady=8, sticky="w")
            entry = ctk.CTkEntry(self, width=200)
            entry.grid(row=row, column=1, padx=20, pady=8)
            self.entries[chave] = entry

        if existing_item:
            for chave, entry in self.entries.items():
                valor = existing_item.get(chave, "")
                entry.insert(0, "" if valor is None else str(valor))
        else:
            self.entries["status"].insert(0, "Disponível")

        self.ok_button = ctk.CTkButton(self, text="OK", command=self.on_ok)
        self.ok_button.grid(row=len(campos), column=0, columnspan=2, pady=10)

        self.grab_set()
        self.wait_window()

    def on_ok(self):
        try:
            fase = self.entries["fase"].get().strip()
            self.result = {
                "id": int(self.entries["id"].get()),
                "descricao": self.entries["descricao"].get(),
                "valor": float(self.entries["valor"].get()),
                "categoria": self.entries["categoria"].get(),
                "status": self.entries["status"].get(),
                "fase": int(fase) if fase else None,
            }
            self.destroy()
        except ValueError:
            messagebox.showerror("Erro de Entrada", "Informe valores numéricos válidos para ID, Valor e Fase.")

# --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- ---
# CLASSE PRINCIPAL DA APLICAÇÃO
# --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- --- ---
class App(ctk.CTk):
    # (rótulo, chave, escala exibida no formulário)
    CAMPOS_CONFIG = [
        ("Índices de Correção", [
            ("INCC % (mensal)", "incc", 100),
            ("IPCA % (mensal)", "ipca", 100),
        ]),
        ("Condições de Pagamento", [
            ("Entrada %", "entrada_pct", 1),
            ("Parcelas da Entrada (meses)", "entrada_meses", 1),
            ("Ato %", "ato_pct", 1),
            ("Intermediária %", "intermediaria_pct", 1),
            ("Mês da Intermediária", "intermediaria_mes", 1),
            ("Chaves %", "chaves_pct", 1),
        ]),
        ("Fases de Venda", [
            ("Pré-lançamento (fases)", "meses_pre_lancamento", 1),
            ("Lançamento (fases)", "meses_lancamento", 1),
            ("Desconto Pré-lançamento %", "desconto_pre", 1),
            ("Desconto Lançamento %", "desconto_lancamento", 1),
        ]),
    ]

    def __init__(self):
        super().__init__()

        self.title("Simulador de Vendas Imobiliárias")
        self.geometry(f"{1500}x900")

        self.grid_columnconfigure(0, weight=0, minsize=620)
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=1)

        # Barra lateral de parâmetros
        self.sidebar_frame = ctk.CTkFrame(self, width=620, corner_radius=0)
        self.sidebar_frame.grid(row=0, column=0, rowspan=4, sticky="nsew")
        self.sidebar_frame.grid_columnconfigure(0, weight=1)
        self.sidebar_frame.grid_propagate(False)
        self.sidebar_frame.grid_rowconfigure(1, weight=1)

        self.logo_label = ctk.CTkLabel(self.sidebar_frame, text="Parâmetros da Simulação", font=ctk.CTkFont(size=20, weight="bold"))
        self.logo_label.grid(row=0, column=0, padx=20, pady=(20, 10))

        self.input_scrollable_frame = ctk.CTkScrollableFrame(self.sidebar_frame, label_text="")
        self.input_scrollable_frame.grid(row=1, column=0, sticky="nsew", padx=20, pady=5)
        self.input_scrollable_frame.grid_columnconfigure(0, weight=1)

        self.entries = {}
        self.create_input_widgets()

        self.calculate_button = ctk.CTkButton(self.sidebar_frame, text="Calcular Simulação", command=self.calculate_analysis)
        self.calculate_button.grid(row=2, column=0, padx=20, pady=10)

        # Painel principal de resultados
        self.main_frame = ctk.CTkFrame(self, corner_radius=10)
        self.main_frame.grid(row=0, column=1, sticky="nsew", padx=20, pady=20)
        self.main_frame.grid_rowconfigure(1, weight=1)
        self.main_frame.grid_columnconfigure(0, weight=1)

        self.results_label = ctk.CTkLabel(self.main_frame, text="Resultados da Simulação", font=ctk.CTkFont(size=20, weight="bold"))
        self.results_label.grid(row=0, column=0, padx=20, pady=(10, 5))

        self.output_tabview = ctk.CTkTabview(self.main_frame, width=250)
        self.output_tabview.grid(row=1, column=0, padx=20, pady=10, sticky="nsew")
        self.output_tabview.add("Resumo")
        self.output_tabview.add("Tabela de Vendas")
        self.output_tabview.add("Fluxo Mensal")
        self.output_tabview.add("Sensibilidade")

        self.chart_canvas = None
        self._create_output_widgets()

    def _create_output_widgets(self):
        # --- Aba Resumo ---
        summary_frame = self.output_tabview.tab("Resumo")
        summary_frame.grid_columnconfigure(0, weight=1)

        base_results_frame = ctk.CTkFrame(summary_frame)
        base_results_frame.grid(row=0, column=0, padx=10, pady=10, sticky="ew")
        base_results_frame.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(base_results_frame, text="MÉTRICAS DA SIMULAÇÃO", font=ctk.CTkFont(weight="bold")).grid(row=0, column=0, columnspan=2, pady=5)

        self.base_results_labels = {
            "receita_total": self._create_result_label(base_results_frame, "Receita Total:", 1),
            "tir_mensal": self._create_result_label(base_results_frame, "TIR Mensal:", 2),
            "tir_anual": self._create_result_label(base_results_frame, "TIR Anual Equivalente:", 3),
            "payback": self._create_result_label(base_results_frame, "Payback:", 4),
            "roi": self._create_result_label(base_results_frame, "ROI:", 5),
        }

        # --- Aba Tabela de Vendas ---
        tabela_frame = self.output_tabview.tab("Tabela de Vendas")
        ctk.CTkLabel(tabela_frame, text="Unidades e Valor por Fase", font=ctk.CTkFont(weight="bold")).pack(pady=5)
        self.tabela_tree = self._create_treeview(tabela_frame, ["ID", "Unidade", "Categoria", "Status", "Valor Base", "Fase", "Valor Fase"], height=10)

        # --- Aba Fluxo Mensal ---
        fluxo_frame = self.output_tabview.tab("Fluxo Mensal")
        ctk.CTkLabel(fluxo_frame, text="Fluxo de Caixa Consolidado (24 meses)", font=ctk.CTkFont(weight="bold")).pack(pady=5)
        self.fluxo_tree = self._create_treeview(fluxo_frame, ["Mês", "Fluxo", "Acumulado"], height=8)
        self.chart_frame = ctk.CTkFrame(fluxo_frame)
        self.chart_frame.pack(pady=5, padx=5, fill="both", expand=True)

        # --- Aba Sensibilidade ---
        sens_frame = self.output_tabview.tab("Sensibilidade")
        ctk.CTkLabel(sens_frame, text="Sensibilidade da Receita Total", font=ctk.CTkFont(weight="bold")).pack(pady=5)
        self.receita_sensitivity_tree = self._create_treeview(sens_frame, ["Variável", "-20%", "-10%", "+0%", "+10%", "+20%"])
        ctk.CTkLabel(sens_frame, text="Sensibilidade da TIR Mensal", font=ctk.CTkFont(weight="bold")).pack(pady=5)
        self.tir_sensitivity_tree = self._create_treeview(sens_frame, ["Variável", "-20%", "-10%", "+0%", "+10%", "+20%"])

    def _create_result_label(self, parent, text, row):
        ctk.CTkLabel(parent, text=text, anchor="w").grid(row=row, column=0, padx=10, pady=2, sticky="ew")
        value_label = ctk.CTkLabel(parent, text="-", anchor="e", font=ctk.CTkFont(weight="bold"))
        value_label.grid(row=row, column=1, padx=10, pady=2, sticky="ew")
        return value_label

    def create_input_widgets(self):
        # --- Unidades ---
        unidades_frame = ctk.CTkFrame(self.input_scrollable_frame)
        unidades_frame.pack(pady=10, padx=10, fill="x", expand=True)
        ctk.CTkLabel(unidades_frame, text="Unidades", font=ctk.CTkFont(weight="bold")).pack()

        self.unidades_tree = self._create_treeview(unidades_frame, ["ID", "Descrição", "Valor", "Categoria", "Status", "Fase"])
        for u in sv.unidades:
            self.unidades_tree.insert("", "end", values=(u["id"], u["descricao"], u["valor"], u["categoria"], u["status"], u.get("fase", "")))

        un_button_frame = ctk.CTkFrame(unidades_frame)
        un_button_frame.pack(pady=5)
        ctk.CTkButton(un_button_frame, text="Adicionar", width=120, command=self._add_unidade).pack(side="left", padx=5)
        ctk.CTkButton(un_button_frame, text="Modificar", width=120, command=self._edit_unidade).pack(side="left", padx=5)
        ctk.CTkButton(un_button_frame, text="Remover", width=120, command=self._remove_unidade, fg_color="red").pack(side="left", padx=5)

        # --- Configuração ---
        for titulo, campos in self.CAMPOS_CONFIG:
            frame = ctk.CTkFrame(self.input_scrollable_frame)
            frame.pack(pady=10, padx=10, fill="x", expand=True)
            ctk.CTkLabel(frame, text=titulo, font=ctk.CTkFont(weight="bold")).pack()
            for label, chave, escala in campos:
                self._create_entry(frame, label, chave, sv.configuracao[chave] * escala)

    def _create_entry(self, parent, label, key, default):
        frame = ctk.CTkFrame(parent)
        frame.pack(pady=4, padx=10, fill="x", expand=True)
        ctk.CTkLabel(frame, text=label, width=300, anchor="w", font=ctk.CTkFont(size=13)).pack(side="left", padx=10)
        entry = ctk.CTkEntry(frame, height=35, width=160)
        entry.pack(side="left", fill="x", expand=True, padx=10)
        entry.insert(0, f"{default:g}")
        self.entries[key] = entry

    def _create_treeview(self, parent, columns, height=6):
        style = ttk.Style()
        style.theme_use("default")

        bg_color = self._get_appearance_mode_color(["#2a2d2e", "#e6e6e6"])
        fg_color = self._get_appearance_mode_color(["white", "black"])

        style.configure("Treeview", background=bg_color, foreground=fg_color, fieldbackground=bg_color, borderwidth=0, font=('Calibri', 10))
        style.map('Treeview', background=[('selected', '#22559b')])
        style.configure("Treeview.Heading", background="#565b5e", foreground="white", font=('Calibri', 10, 'bold'))

        tree = ttk.Treeview(parent, columns=columns, show='headings', height=height)
        for col in columns:
            tree.heading(col, text=col)
            tree.column(col, width=80, anchor="center")
        tree.pack(pady=5, padx=5, fill="both", expand=True)
        return tree

    def _get_appearance_mode_color(self, colors):
        return colors[0] if ctk.get_appearance_mode() == "Dark" else colors[1]

    def _unidade_values(self, u):
        return (u["id"], u["descricao"], u["valor"], u["categoria"], u["status"], "" if u["fase"] is None else u["fase"])

    def _add_unidade(self):
        dialog = UnidadeDialog(self)
        if dialog.result:
            self.unidades_tree.insert("", "end", values=self._unidade_values(dialog.result))

    def _edit_unidade(self):
        selected_id = self.unidades_tree.selection()
        if not selected_id: return
        v = self.unidades_tree.item(selected_id[0], "values")
        existing_item = {"id": v[0], "descricao": v[1], "valor": v[2], "categoria": v[3], "status": v[4], "fase": v[5]}
        dialog = UnidadeDialog(self, existing_item)
        if dialog.result:
            self.unidades_tree.item(selected_id[0], values=self._unidade_values(dialog.result))

    def _remove_unidade(self):
        selected_id = self.unidades_tree.selection()
        if not selected_id: return
        for item_id in selected_id:
            self.unidades_tree.delete(item_id)

    def calculate_analysis(self):
        try:
            lista = self._get_unidades_from_gui()
            cfg = self._get_config_from_gui()

            resultado = sv.executar_simulacao(lista, cfg)
            fluxo = resultado["fluxo_total"]

            print("\n--- DIAGNÓSTICO DE FLUXOS (GUI) ---")
            print(f"Unidades: {len(lista)}")
            print(f"Fluxo Total: Sum={fluxo.sum():,.2f}, Min={fluxo.min():,.2f}, Max={fluxo.max():,.2f}")
            print(f"TIR convergiu: {resultado['tir_convergiu']}")
            print("-----------------------------------")

            nota_tir = "" if resultado["tir_convergiu"] else " (não convergiu)"
            self.base_results_labels["receita_total"].configure(text=sv.formatar_moeda(resultado["receita_total"]))
            self.base_results_labels["tir_mensal"].configure(text=f"{resultado['tir_mensal']:.2%}{nota_tir}")
            self.base_results_labels["tir_anual"].configure(text=f"{resultado['tir_anual']:.2%}")
            self.base_results_labels["payback"].configure(
                text="Além de 24 meses" if resultado["payback_excedido"] else f"{resultado['payback']} meses"
            )
            self.base_results_labels["roi"].configure(text=f"{resultado['roi']:.2f}%")

            self._update_tabela_treeview(resultado["tabela_unidades"])
            self._update_fluxo_treeview(fluxo)
            self._update_chart(fluxo)

            df_sens = sv.analise_de_sensibilidade(lista, cfg)
            ordem = list(dict.fromkeys(df_sens["Variação"]))
            df_receita = df_sens.pivot(index="Variável", columns="Variação", values="Receita Total")[ordem]
            df_tir = df_sens.pivot(index="Variável", columns="Variação", values="TIR Mensal")[ordem]
            self._update_sensitivity_treeview(self.receita_sensitivity_tree, df_receita, sv.formatar_moeda)
            self._update_sensitivity_treeview(self.tir_sensitivity_tree, df_tir, lambda x: f"{x:.2%}" if pd.notna(x) else "N/A")

            self.output_tabview.set("Resumo")

        except ValueError as e:
            messagebox.showerror("Erro", f"Erro no cálculo: {str(e)}")

    def _get_unidades_from_gui(self):
        lista = []
        for item_id in self.unidades_tree.get_children():
            v = self.unidades_tree.item(item_id, "values")
            unidade = {
                "id": int(v[0]),
                "descricao": v[1],
                "valor": float(v[2]),
                "categoria": v[3],
                "status": v[4],
            }
            if str(v[5]).strip():
                unidade["fase"] = int(v[5])
            lista.append(unidade)
        return lista

    def _get_config_from_gui(self):
        valores = {}
        for _, campos in self.CAMPOS_CONFIG:
            for _, chave, escala in campos:
                # campo inválido volta para o padrão
                numero = sv.parse_num(self.entries[chave].get(), sv.configuracao[chave] * escala)
                valores[chave] = numero / escala
        return sv.montar_configuracao(valores)

    def _update_tabela_treeview(self, df):
        for item in self.tabela_tree.get_children():
            self.tabela_tree.delete(item)
        for _, row in df.iterrows():
            self.tabela_tree.insert("", "end", values=(
                row["ID"],
                row["Unidade"],
                row["Categoria"],
                row["Status"],
                sv.formatar_moeda(row["Valor Base"]),
                row["Fase"],
                sv.formatar_moeda(row["Valor Fase"]),
            ))

    def _update_fluxo_treeview(self, fluxo):
        for item in self.fluxo_tree.get_children():
            self.fluxo_tree.delete(item)
        acumulado = fluxo.cumsum()
        for mes in fluxo.index:
            self.fluxo_tree.insert("", "end", values=(
                f"M{mes + 1}",
                sv.formatar_moeda(fluxo[mes]),
                sv.formatar_moeda(acumulado[mes]),
            ))

    def _update_chart(self, fluxo):
        if self.chart_canvas is not None:
            self.chart_canvas.get_tk_widget().destroy()
        fig = grafico_fluxo.criar_figura_fluxo(fluxo)
        self.chart_canvas = FigureCanvasTkAgg(fig, master=self.chart_frame)
        self.chart_canvas.draw()
        self.chart_canvas.get_tk_widget().pack(fill="both", expand=True)

    def _update_sensitivity_treeview(self, tree, df, format_func):
        tree["columns"] = ["Variável"] + df.columns.tolist()
        for col in tree["columns"]:
            tree.heading(col, text=col)
            tree.column(col, width=110, anchor="center")
        tree.column("Variável", width=180, anchor="w")
        for item in tree.get_children(): tree.delete(item)
        for idx, row in df.iterrows():
            tree.insert("", "end", values=[idx] + [format_func(x) for x in row.values])


if __name__ == "__main__":
    app = App()
    app.mainloop()
