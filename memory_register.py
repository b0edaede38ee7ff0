"""Registro de memoria (M+, M−, MR, MC)."""

from calculator_state import CalculatorState
from number_format import number_to_plain_string, number_to_string, parse_number


def _display_value(state: CalculatorState) -> float:
    value = parse_number(state.display)
    return 0 if value is None else value


def memory_add(state: CalculatorState) -> CalculatorState:
    return state.update(memory=state.memory + _display_value(state))


def memory_subtract(state: CalculatorState) -> CalculatorState:
    return state.update(memory=state.memory - _display_value(state))


def memory_recall(state: CalculatorState) -> CalculatorState:
    return state.update(
        display=number_to_string(state.memory),
        expression=state.expression + number_to_plain_string(state.memory),
        waiting_for_operand=False,
        has_error=False,
    )


def memory_clear(state: CalculatorState) -> CalculatorState:
    return state.update(memory=0)
