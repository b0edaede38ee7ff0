"""
Interfaz gráfica de la calculadora científica.

Usa tkinter. La interfaz solo traduce botones y teclas a eventos, los
envía a la sesión y vuelve a pintar la vista con el estado resultante.
"""

import tkinter as tk
from tkinter import font as tkfont

import config
from calculator_session import (
    Backspace,
    CalculatorSession,
    ClearAll,
    Constant,
    Decimal,
    Digit,
    Evaluate,
    Function,
    GenerateRandom,
    InsertAnswer,
    MemoryAdd,
    MemoryClear,
    MemoryRecall,
    MemorySubtract,
    Operator,
    ToggleAngleMode,
    ToggleSign,
)
from calculator_state import AngleMode
from keyboard_bindings import event_for_key
from number_format import format_display, number_to_string


def _fn(name):
    return (name, Function(name), "func")


def _num(digit):
    return (digit, Digit(digit), "num")


def _op(glyph):
    return (glyph, Operator(glyph), "op")


class CalculatorApp:
    """Ventana principal de la calculadora científica."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "expr_fg":    "#BAC2DE",
        "result_fg":  "#A6E3A1",
        "error_fg":   "#F38BA8",
    }

    # ── Definición del teclado ───────────────────────────────────
    #  Cada fila es una lista de (texto, evento, tipo_color)

    KEYPAD = [
        [_fn("sin"), _fn("cos"), _fn("tan"),
         ("π", Constant("π"), "func"), ("e", Constant("e"), "func")],

        [_fn("sin⁻¹"), _fn("cos⁻¹"), _fn("tan⁻¹"),
         ("MC", MemoryClear(), "special"), ("MR", MemoryRecall(), "special")],

        [_fn("x^y"), _fn("x³"), _fn("x²"), _fn("eˣ"), _fn("10ˣ")],

        [_fn("y√x"), _fn("³√x"), _fn("√x"), _fn("ln"), _fn("log")],

        [("(", Operator("("), "func"), (")", Operator(")"), "func"),
         _fn("1/x"), _fn("%"), _fn("n!")],

        [_num("7"), _num("8"), _num("9"), _op("+"),
         ("Back", Backspace(), "special")],

        [_num("4"), _num("5"), _num("6"), _op("−"),
         ("Ans", InsertAnswer(), "special")],

        [_num("1"), _num("2"), _num("3"), _op("×"),
         ("M+", MemoryAdd(), "special")],

        [_num("0"), (".", Decimal(), "num"), ("RND", GenerateRandom(), "special"),
         _op("÷"), ("M−", MemorySubtract(), "special")],

        [("±", ToggleSign(), "special"), ("AC", ClearAll(), "special"),
         ("=", Evaluate(), "equals")],
    ]

    COLUMNS = 5

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, session: CalculatorSession | None = None):
        self.root = root
        self.root.title(config.APP_TITLE)
        self.root.configure(bg=self.C["bg"])

        self.session = session if session is not None else CalculatorSession()

        self._init_fonts()
        self._create_display()
        self._create_status_bar()
        self._create_keypad()
        self._bind_keyboard()
        self._refresh()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr   = tkfont.Font(family="Consolas", size=14)
        self._f_result = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=14)
        self._f_func   = tkfont.Font(family="Segoe UI", size=11)
        self._f_small  = tkfont.Font(family="Segoe UI", size=10)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        # La expresión se muestra tal cual
        self.expr_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.expr_var, font=self._f_expr,
            bg=self.C["display_bg"], fg=self.C["expr_fg"], anchor="e",
        ).pack(fill="x", pady=(4, 0))

        self.result_var = tk.StringVar(value="0")
        self.result_label = tk.Label(
            frame, textvariable=self.result_var, font=self._f_result,
            bg=self.C["display_bg"], fg=self.C["result_fg"], anchor="e",
        )
        self.result_label.pack(fill="x", pady=(2, 4))

    # ── Barra de estado (DEG/RAD · memoria) ──────────────────────

    def _create_status_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, text="DEG", font=self._f_small, width=6,
            bg=self.C["toggle_on"], fg=self.C["bg"],
            activebackground=self.C["toggle_on"], relief="flat",
            command=lambda: self._dispatch(ToggleAngleMode()),
        )
        self.angle_btn.pack(side="left", padx=(0, 4))

        self.memory_var = tk.StringVar(value="M: 0")
        tk.Label(
            frame, textvariable=self.memory_var, font=self._f_small,
            bg=self.C["bg"], fg=self.C["expr_fg"],
        ).pack(side="right")

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        for c in range(self.COLUMNS):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            spans = self._compute_spans(len(row_def), self.COLUMNS)
            col_pos = 0
            for idx, (text, event, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text,
                    font=self._f_func if kind == "func" else self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda ev=event: self._dispatch(ev),
                )
                btn.grid(row=r, column=col_pos, columnspan=spans[idx],
                         sticky="nsew", padx=2, pady=2, ipady=6)
                col_pos += spans[idx]
            frame.rowconfigure(r, weight=1)

    @staticmethod
    def _compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
        """Reparte max_cols entre cols_in_row botones."""
        base, extra = divmod(max_cols, cols_in_row)
        spans = [base] * cols_in_row
        # Asignar columnas extra al último botón (generalmente '=')
        spans[-1] += extra
        return spans

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keypress)

    def _on_keypress(self, event):
        calc_event = event_for_key(event.char, event.keysym)
        if calc_event is None:
            return None
        self._dispatch(calc_event)
        return "break"

    # ── Acciones ─────────────────────────────────────────────────

    def _dispatch(self, event):
        self.session.dispatch(event)
        self._refresh()

    def _refresh(self):
        view = self.session.snapshot()
        self.expr_var.set(view["expression"])
        self.result_var.set(format_display(view["display"]))
        self.result_label.config(
            fg=self.C["error_fg"] if self.session.state.has_error else self.C["result_fg"]
        )

        if view["angle_mode"] is AngleMode.DEG:
            self.angle_btn.config(text="DEG", bg=self.C["toggle_on"], fg=self.C["bg"])
        else:
            self.angle_btn.config(text="RAD", bg=self.C["op"], fg=self.C["op_fg"])
        self.memory_var.set(f"M: {number_to_string(view['memory'])}")
