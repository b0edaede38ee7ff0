import pytest

import expression_assembler as assembler
from calculator_state import INITIAL_STATE, AngleMode, CalculatorState
from expression_assembler import FUNCTION_FRAGMENTS


ERROR_STATE = INITIAL_STATE.update(display="Error", has_error=True)


def _digits(state, digits):
    for digit in digits:
        state = assembler.insert_digit(state, digit)
    return state


# ── Dígitos ──────────────────────────────────────────────────────

def test_digits_accumulate_in_display_and_expression():
    state = _digits(INITIAL_STATE, "123")
    assert state.display == "123"
    assert state.expression == "123"


def test_leading_zero_is_replaced_in_display_only():
    state = _digits(INITIAL_STATE, "05")
    assert state.display == "5"
    assert state.expression == "05"


def test_digit_after_operator_starts_new_token():
    state = CalculatorState(display="12", expression="12+", waiting_for_operand=True)
    state = assembler.insert_digit(state, "3")
    assert state.display == "3"
    assert state.expression == "12+3"
    assert not state.waiting_for_operand


def test_digit_after_error_starts_fresh():
    state = assembler.insert_digit(ERROR_STATE, "7")
    assert state.display == "7"
    assert state.expression == "7"
    assert not state.has_error


# ── Operadores ───────────────────────────────────────────────────

@pytest.mark.parametrize(
    "operator, token",
    [("+", "+"), ("−", "-"), ("-", "-"), ("×", "*"), ("*", "*"), ("÷", "/"), ("/", "/")],
)
def test_operator_translated_and_waits_for_operand(operator, token):
    state = assembler.insert_operator(_digits(INITIAL_STATE, "2"), operator)
    assert state.expression == "2" + token
    assert state.waiting_for_operand


def test_parentheses_do_not_change_waiting_flag():
    state = assembler.insert_operator(INITIAL_STATE, "(")
    assert state.expression == "("
    assert not state.waiting_for_operand

    state = assembler.insert_operator(_digits(INITIAL_STATE, "2"), "×")
    state = assembler.insert_operator(state, "(")
    assert state.expression == "2*("
    assert state.waiting_for_operand


def test_consecutive_operators_are_accepted():
    state = assembler.insert_operator(INITIAL_STATE, "+")
    state = assembler.insert_operator(state, "×")
    assert state.expression == "+*"


def test_unknown_operator_is_ignored():
    assert assembler.insert_operator(INITIAL_STATE, "?") is INITIAL_STATE


def test_operator_after_error_clears_error():
    state = assembler.insert_operator(ERROR_STATE, "+")
    assert not state.has_error
    assert state.display == "0"
    assert state.expression == "+"


# ── Punto decimal ────────────────────────────────────────────────

def test_decimal_on_initial_state():
    state = assembler.insert_decimal(INITIAL_STATE)
    assert state.display == "0."
    assert state.expression == "."


def test_decimal_after_operator_starts_zero_point():
    state = CalculatorState(display="4", expression="4*", waiting_for_operand=True)
    state = assembler.insert_decimal(state)
    assert state.display == "0."
    assert state.expression == "4*0."
    assert not state.waiting_for_operand


def test_decimal_after_error_starts_zero_point():
    state = assembler.insert_decimal(ERROR_STATE)
    assert state.display == "0."
    assert state.expression == "0."
    assert not state.has_error


def test_second_decimal_point_is_ignored():
    state = assembler.insert_decimal(_digits(INITIAL_STATE, "1"))
    state = _digits(state, "5")
    assert assembler.insert_decimal(state) is state
    assert state.display == "1.5"


# ── Constantes, Ans y aleatorio ──────────────────────────────────

def test_constant_shows_value_and_keeps_symbol():
    state = assembler.insert_constant(INITIAL_STATE, "π")
    assert state.display == "3.141592653589793"
    assert state.expression == "π"

    state = assembler.insert_constant(state, "e")
    assert state.display == "2.718281828459045"
    assert state.expression == "πe"


def test_unknown_constant_is_ignored():
    assert assembler.insert_constant(INITIAL_STATE, "φ") is INITIAL_STATE


def test_previous_answer_is_inserted_as_operand():
    state = CalculatorState(
        display="3", expression="3*", previous_answer=4.0, waiting_for_operand=True,
    )
    state = assembler.insert_previous_answer(state)
    assert state.display == "4"
    assert state.expression == "3*4"
    assert not state.waiting_for_operand


def test_generate_random_uses_given_source():
    state = assembler.generate_random(INITIAL_STATE, rng=lambda: 0.25)
    assert state.display == "0.25"
    assert state.expression == "0.25"


def test_generate_random_default_range():
    state = assembler.generate_random(INITIAL_STATE)
    assert 0 <= float(state.display) < 1


# ── Funciones ────────────────────────────────────────────────────

@pytest.mark.parametrize("key, fragment", sorted(FUNCTION_FRAGMENTS.items()))
def test_function_fragment_appended(key, fragment):
    state = assembler.apply_function(_digits(INITIAL_STATE, "2"), key)
    assert state.expression == "2" + fragment
    assert state.waiting_for_operand is fragment.endswith("(")


def test_postfix_functions_do_not_wait_for_operand():
    for key in ("x²", "x³", "n!", "%", "x^y"):
        assert not assembler.apply_function(INITIAL_STATE, key).waiting_for_operand


def test_function_alias():
    assert assembler.apply_function(INITIAL_STATE, "asin").expression == "asin("
    assert assembler.apply_function(INITIAL_STATE, "nthRoot").expression == "nthRoot("


def test_unknown_function_is_ignored():
    assert assembler.apply_function(INITIAL_STATE, "sinh") is INITIAL_STATE


def test_function_after_error_clears_error():
    state = assembler.apply_function(ERROR_STATE, "sin")
    assert not state.has_error
    assert state.expression == "sin("


# ── Edición ──────────────────────────────────────────────────────

def test_toggle_sign_changes_display_only():
    state = _digits(INITIAL_STATE, "5")
    negated = assembler.toggle_sign(state)
    assert negated.display == "-5"
    assert negated.expression == "5"
    assert assembler.toggle_sign(negated).display == "5"


def test_toggle_sign_noop_on_zero_and_error():
    assert assembler.toggle_sign(INITIAL_STATE) is INITIAL_STATE
    assert assembler.toggle_sign(ERROR_STATE) is ERROR_STATE


def test_backspace_removes_last_character():
    state = assembler.backspace(_digits(INITIAL_STATE, "123"))
    assert state.display == "12"
    assert state.expression == "12"


def test_backspace_on_single_digit_returns_to_zero():
    state = assembler.backspace(_digits(INITIAL_STATE, "5"))
    assert state.display == "0"
    assert state.expression == ""


def test_backspace_on_zero_clears_expression():
    state = CalculatorState(display="0", expression="2+")
    state = assembler.backspace(state)
    assert state.display == "0"
    assert state.expression == ""


def test_backspace_clears_error():
    state = assembler.backspace(ERROR_STATE)
    assert state.display == "0"
    assert not state.has_error


def test_clear_all_resets_memory_and_angle_mode():
    state = CalculatorState(
        display="12", expression="12", memory=5, angle_mode=AngleMode.RAD,
        previous_answer=3,
    )
    assert assembler.clear_all(state) == INITIAL_STATE


def test_clear_all_with_custom_initial_state():
    initial = INITIAL_STATE.update(angle_mode=AngleMode.RAD)
    assert assembler.clear_all(_digits(INITIAL_STATE, "9"), initial) is initial


def test_toggle_angle_mode():
    state = assembler.toggle_angle_mode(INITIAL_STATE)
    assert state.angle_mode is AngleMode.RAD
    assert state.display == INITIAL_STATE.display
    assert assembler.toggle_angle_mode(state).angle_mode is AngleMode.DEG


def test_random_value_in_expression_has_no_exponent():
    state = assembler.generate_random(INITIAL_STATE, rng=lambda: 5e-7)
    assert state.display == "5e-7"
    assert state.expression == "0.0000005"
