"""
Construcción de la expresión tecla a tecla.

Cada operación recibe el estado actual (y el dato del evento) y devuelve
el estado siguiente. No se evalúa nada aquí: la expresión se acumula tal
cual y se valida al pulsar "=".
"""

from __future__ import annotations

import math
import random

from calculator_state import INITIAL_STATE, CalculatorState
from number_format import number_to_plain_string, number_to_string


OPERATOR_TOKENS = {
    "+": "+",
    "−": "-",
    "-": "-",
    "×": "*",
    "*": "*",
    "÷": "/",
    "/": "/",
}

# No activan la espera de operando
VERBATIM_TOKENS = ("(", ")", ",")

CONSTANTS = {
    "π": number_to_string(math.pi),
    "e": number_to_string(math.e),
}

FUNCTION_FRAGMENTS = {
    "sin": "sin(",
    "cos": "cos(",
    "tan": "tan(",
    "sin⁻¹": "asin(",
    "cos⁻¹": "acos(",
    "tan⁻¹": "atan(",
    "ln": "log(",
    "log": "log10(",
    "√x": "sqrt(",
    "³√x": "cbrt(",
    "x²": "^2",
    "x³": "^3",
    "x^y": "^",
    "eˣ": "exp(",
    "10ˣ": "10^(",
    "1/x": "1/(",
    "n!": "!",
    "%": "/100",
    "y√x": "nthRoot(",
}

# Nombres ASCII para atajos y pruebas
FUNCTION_ALIASES = {
    "asin": "sin⁻¹",
    "acos": "cos⁻¹",
    "atan": "tan⁻¹",
    "sqrt": "√x",
    "cbrt": "³√x",
    "x^2": "x²",
    "x^3": "x³",
    "exp": "eˣ",
    "10^x": "10ˣ",
    "factorial": "n!",
    "nthRoot": "y√x",
}


def function_fragment(name: str) -> str | None:
    return FUNCTION_FRAGMENTS.get(FUNCTION_ALIASES.get(name, name))


def _recover(state: CalculatorState) -> CalculatorState:
    """Sale del estado de error antes de aplicar el evento."""
    if not state.has_error:
        return state
    return state.update(display="0", expression="", has_error=False)


def _insert_operand(state: CalculatorState, text: str, source: str | None = None) -> CalculatorState:
    return state.update(
        display=text,
        expression=state.expression + (text if source is None else source),
        waiting_for_operand=False,
        has_error=False,
    )


# ── Operandos ────────────────────────────────────────────────────

def insert_digit(state: CalculatorState, digit: str) -> CalculatorState:
    if state.waiting_for_operand or state.display == "0" or state.has_error:
        return _insert_operand(_recover(state), digit)

    return state.update(
        display=state.display + digit,
        expression=state.expression + digit,
    )


def insert_decimal(state: CalculatorState) -> CalculatorState:
    if state.waiting_for_operand or state.has_error:
        return _insert_operand(_recover(state), "0.")

    if "." not in state.display:
        return state.update(
            display=state.display + ".",
            expression=state.expression + ".",
        )

    return state


def insert_constant(state: CalculatorState, constant: str) -> CalculatorState:
    """Muestra el valor numérico pero guarda el símbolo en la expresión."""
    value = CONSTANTS.get(constant)
    if value is None:
        return state

    state = _recover(state)
    return state.update(
        display=value,
        expression=state.expression + constant,
        waiting_for_operand=False,
    )


def _insert_value(state: CalculatorState, value) -> CalculatorState:
    """La pantalla muestra el valor; la expresión lo recibe sin exponente."""
    return _insert_operand(_recover(state), number_to_string(value), number_to_plain_string(value))


def insert_previous_answer(state: CalculatorState) -> CalculatorState:
    return _insert_value(state, state.previous_answer)


def generate_random(state: CalculatorState, rng=random.random) -> CalculatorState:
    return _insert_value(state, rng())


# ── Operadores y funciones ───────────────────────────────────────

def insert_operator(state: CalculatorState, operator: str) -> CalculatorState:
    if operator in VERBATIM_TOKENS:
        state = _recover(state)
        return state.update(expression=state.expression + operator)

    token = OPERATOR_TOKENS.get(operator)
    if token is None:
        return state

    state = _recover(state)
    return state.update(
        expression=state.expression + token,
        waiting_for_operand=True,
    )


def apply_function(state: CalculatorState, name: str) -> CalculatorState:
    fragment = function_fragment(name)
    if fragment is None:
        return state

    state = _recover(state)
    return state.update(
        expression=state.expression + fragment,
        waiting_for_operand=fragment.endswith("("),
    )


# ── Edición ──────────────────────────────────────────────────────

def toggle_sign(state: CalculatorState) -> CalculatorState:
    """Cambia el signo solo en pantalla; la expresión no se modifica."""
    if state.display == "0" or state.has_error:
        return state

    if state.display.startswith("-"):
        return state.update(display=state.display[1:])
    return state.update(display="-" + state.display)


def backspace(state: CalculatorState) -> CalculatorState:
    if state.has_error or state.display == "0":
        return state.update(display="0", expression="", has_error=False)

    display = state.display[:-1] if len(state.display) > 1 else "0"
    return state.update(display=display, expression=state.expression[:-1])


def clear_all(state: CalculatorState, initial: CalculatorState = INITIAL_STATE) -> CalculatorState:
    """Vuelve al estado inicial completo (memoria y modo angular incluidos)."""
    return initial


def toggle_angle_mode(state: CalculatorState) -> CalculatorState:
    return state.update(angle_mode=state.angle_mode.toggled())
