"""Traducción de teclas físicas a eventos de la calculadora."""

from __future__ import annotations

from calculator_session import (
    Backspace,
    ClearAll,
    Decimal,
    Digit,
    Evaluate,
    Operator,
)

# Los operadores se envían con el glifo que muestra el teclado en pantalla
OPERATOR_GLYPHS = {
    "+": "+",
    "-": "−",
    "*": "×",
    "/": "÷",
    "(": "(",
    ")": ")",
}

NAMED_KEYS = {
    "Enter": Evaluate,
    "Return": Evaluate,
    "KP_Enter": Evaluate,
    "Escape": ClearAll,
    "Backspace": Backspace,
    "BackSpace": Backspace,
    "\r": Evaluate,
    "\n": Evaluate,
    "\x1b": ClearAll,
    "\b": Backspace,
}


def event_for_key(key: str, keysym: str | None = None):
    """Devuelve el evento de la tecla o None si no tiene asignación.

    ``key`` es el carácter escrito; ``keysym`` el nombre de la tecla
    (tkinter) cuando lo hay.
    """
    for name in (keysym, key):
        if name in NAMED_KEYS:
            return NAMED_KEYS[name]()

    if not key or len(key) != 1:
        return None
    if key.isdigit() and key.isascii():
        return Digit(key)
    if key == ".":
        return Decimal()
    if key == "=":
        return Evaluate()
    if key in OPERATOR_GLYPHS:
        return Operator(OPERATOR_GLYPHS[key])
    return None
