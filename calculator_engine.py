"""
Motor de cálculo para la calculadora científica.

Este módulo provee la clase CalculatorEngine, que toma la expresión
acumulada por el ensamblador, la reescribe (constantes, modo angular) y la
delega al FormulaEvaluator. El proveedor matemático es reemplazable
(PythonMathProvider o MPMathProvider).

Contrato de interfaz:
    - compute(expression: str, angle_mode: AngleMode) -> Ok | Err
    - evaluate(state: CalculatorState) -> CalculatorState

Limitación conocida: la reescritura es textual y sin contexto; cada
llamada trigonométrica se reescribe por separado aunque esté anidada.
"""

import logging
import math
import re

from calculator_state import AngleMode, CalculatorState
from formula_evaluator import Err, EvaluationResult, FormulaEvaluator, PythonMathProvider
from number_format import ERROR_TEXT, format_number

logger = logging.getLogger(__name__)

PI_LITERAL = f"({math.pi!r})"
E_LITERAL = f"({math.e!r})"

# Una 'e' que no forma parte de un nombre ni va seguida de un dígito
_E_CONSTANT_RE = re.compile(r"(?<![A-Za-z_])e(?![A-Za-z_\d])")
_DIRECT_TRIG_RE = re.compile(r"(?<![A-Za-z_])(sin|cos|tan)\(")
_INVERSE_TRIG_RE = re.compile(r"(?<![A-Za-z_])(asin|acos|atan)\(")


def substitute_constants(expression: str) -> str:
    expression = expression.replace("π", PI_LITERAL)
    return _E_CONSTANT_RE.sub(E_LITERAL, expression)


def rewrite_angle_mode(expression: str, angle_mode: AngleMode) -> str:
    """En DEG: grados -> radianes antes de sin/cos/tan y radianes ->
    grados después de asin/acos/atan."""
    if angle_mode is not AngleMode.DEG:
        return expression

    expression = _DIRECT_TRIG_RE.sub(r"\1((pi/180)*", expression)
    return _INVERSE_TRIG_RE.sub(r"(180/pi)*\1(", expression)


class CalculatorEngine:
    """Evalúa la expresión de la sesión y actualiza los registros."""

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()
        self._evaluator = FormulaEvaluator(self._provider)

    @property
    def provider(self):
        return self._provider

    # ── Evaluación ───────────────────────────────────────────────

    def compute(self, expression: str, angle_mode: AngleMode) -> EvaluationResult:
        rewritten = rewrite_angle_mode(substitute_constants(expression), angle_mode)
        logger.debug("Expresión reescrita (%s): %s", angle_mode.value, rewritten)
        return self._evaluator.try_evaluate(rewritten)

    def evaluate(self, state: CalculatorState) -> CalculatorState:
        if not state.expression:
            return state

        result = self.compute(state.expression, state.angle_mode)
        if isinstance(result, Err):
            logger.info("No se pudo evaluar %r: %s", state.expression, result.error)
            return state.update(
                display=ERROR_TEXT,
                expression="",
                waiting_for_operand=False,
                has_error=True,
            )

        return state.update(
            display=format_number(result.value),
            expression="",
            previous_answer=result.value,
            waiting_for_operand=True,
            has_error=False,
        )
