"""Parseo y evaluación de expresiones para la calculadora científica.

El evaluador recibe la expresión ya reescrita por el motor (constantes
sustituidas, conversión de ángulos aplicada) y devuelve un número real o
falla con EvaluationFailure.
"""

from __future__ import annotations

import contextlib
import io
import math
import re
import token
import tokenize
from dataclasses import dataclass


class EvaluationFailure(ValueError):
    """Expresión mal formada o matemáticamente inválida."""


@dataclass(frozen=True)
class Ok:
    value: float


@dataclass(frozen=True)
class Err:
    error: EvaluationFailure


EvaluationResult = Ok | Err


def _real_root(x, n):
    if n == 0:
        raise ValueError("Raíz de índice cero")
    if x < 0:
        if n != int(n) or int(n) % 2 != 1:
            raise ValueError("Raíz par de un número negativo")
        return -_real_root(-x, n)

    root = x ** (1 / n)
    nearest = round(root)
    if nearest and nearest ** n == x:
        return float(nearest)
    return root


class PythonMathProvider:
    """Provee funciones y constantes matemáticas en un namespace seguro."""

    number_type = "float"

    def working_precision(self):
        return contextlib.nullcontext()

    @staticmethod
    def _factorial(x):
        if x < 0:
            raise ValueError("factorial requiere un número no negativo")
        if x == int(x):
            n = int(x)
            if n > 170:
                raise OverflowError("factorial demasiado grande")
            return float(math.factorial(n))
        return math.gamma(x + 1)

    @staticmethod
    def to_float(value) -> float:
        if isinstance(value, complex):
            raise EvaluationFailure("Resultado complejo")
        return float(value)

    def build_namespace(self) -> dict:
        return {
            "sin": math.sin,
            "cos": math.cos,
            "tan": math.tan,
            "asin": math.asin,
            "acos": math.acos,
            "atan": math.atan,
            "log": math.log,
            "log10": math.log10,
            "sqrt": math.sqrt,
            "cbrt": math.cbrt,
            "exp": math.exp,
            "nthRoot": lambda x, n=2: _real_root(x, n),
            "factorial": self._factorial,
            "float": float,
            "π": math.pi,
            "pi": math.pi,
            "e": math.e,
        }


class FormulaEvaluator:
    """Transforma expresiones de UI y evalúa su valor numérico."""

    _ALLOWED_CHARS = re.compile(r"^[\d\s+\-*/^().,!πa-zA-Z×÷−√]*$")
    _FUNCTION_IDENTIFIERS = {
        "sin",
        "cos",
        "tan",
        "asin",
        "acos",
        "atan",
        "log",
        "log10",
        "sqrt",
        "cbrt",
        "exp",
        "nthRoot",
        "factorial",
    }
    _CONSTANT_IDENTIFIERS = {"pi", "e", "π"}

    _NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?"

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()

    @property
    def provider(self):
        return self._provider

    def evaluate(self, expression: str) -> float:
        """Evalúa la expresión.

        Raises:
            EvaluationFailure: cualquier error de sintaxis, de dominio,
                división por cero o resultado no real/no finito.
        """
        if not expression or not expression.strip():
            raise EvaluationFailure("Expresión vacía")

        self._validate_raw_expression(expression)
        processed = self._preprocess(expression)

        with self._provider.working_precision():
            try:
                processed = self._promote_numeric_literals(processed)
                namespace = self._provider.build_namespace()
                value = eval(processed, {"__builtins__": {}}, namespace)
                result = self._provider.to_float(value)
            except EvaluationFailure:
                raise
            except (SyntaxError, tokenize.TokenError) as exc:
                raise EvaluationFailure("Error de sintaxis") from exc
            except NameError as exc:
                raise EvaluationFailure(f"Desconocido: {exc}") from exc
            except ZeroDivisionError as exc:
                raise EvaluationFailure("División por cero") from exc
            except (ArithmeticError, ValueError, TypeError, RecursionError) as exc:
                raise EvaluationFailure(str(exc) or type(exc).__name__) from exc

        if not math.isfinite(result):
            raise EvaluationFailure("Resultado no finito")
        return result

    def try_evaluate(self, expression: str) -> EvaluationResult:
        try:
            return Ok(self.evaluate(expression))
        except EvaluationFailure as exc:
            return Err(exc)

    def _validate_raw_expression(self, expression: str):
        if not self._ALLOWED_CHARS.fullmatch(expression):
            raise EvaluationFailure("Expresión contiene caracteres inválidos")
        if "__" in expression:
            raise EvaluationFailure("Expresión contiene operadores no permitidos")

    def _preprocess(self, expr: str) -> str:
        expr = expr.strip()

        expr = expr.replace("×", "*")
        expr = expr.replace("÷", "/")
        expr = expr.replace("−", "-")
        expr = expr.replace("√(", "sqrt(")
        expr = expr.replace("π", "pi")

        expr = self._strip_leading_zeros(expr)
        expr = self._replace_factorial(expr)
        expr = expr.replace("^", "**")
        expr = self._insert_implicit_mult(expr)

        return expr

    @staticmethod
    def _strip_leading_zeros(expr: str) -> str:
        return re.sub(r"(?<![\w.])0+(?=\d)", "", expr)

    def _replace_factorial(self, expr: str) -> str:
        chars = list(expr)
        i = len(chars) - 1

        while i >= 0:
            if chars[i] != "!":
                i -= 1
                continue

            j = i - 1

            if j >= 0 and chars[j] == ")":
                depth = 1
                j -= 1
                while j >= 0 and depth > 0:
                    if chars[j] == ")":
                        depth += 1
                    elif chars[j] == "(":
                        depth -= 1
                    j -= 1
                j += 1
                # Incluir el nombre de la función: sin(30)! -> factorial(sin(30))
                k = j
                while k > 0 and chars[k - 1].isalnum():
                    k -= 1
                if k < j and chars[k].isalpha():
                    j = k
                operand = "".join(chars[j:i])
                chars[j : i + 1] = list(f"factorial({operand})")
                i = j - 1
                continue

            if j >= 0 and (chars[j].isdigit() or chars[j] == "."):
                start = j
                while start > 0 and (
                    chars[start - 1].isdigit() or chars[start - 1] == "."
                ):
                    start -= 1
                operand = "".join(chars[start:i])
                chars[start : i + 1] = list(f"factorial({operand})")
                i = start - 1
                continue

            if j >= 0 and chars[j].isalpha():
                start = j
                while start > 0 and chars[start - 1].isalpha():
                    start -= 1
                operand = "".join(chars[start:i])
                chars[start : i + 1] = list(f"factorial({operand})")
                i = start - 1
                continue

            i -= 1

        return "".join(chars)

    def _insert_implicit_mult(self, expr: str) -> str:
        number = self._NUMBER
        patterns = [
            (r"\)\s*\(", ")*("),
            (rf"(?<![\w.])({number})\s*\(", r"\1*("),
            (r"\)\s*([\w.])", r")*\1"),
            (rf"(?<![\w.])({number})(?![eE][+\-]?\d)([A-Za-z])", r"\1*\2"),
        ]
        for pat, repl in patterns:
            expr = re.sub(pat, repl, expr)
        return expr

    def _promote_numeric_literals(self, expression: str) -> str:
        """Convierte cada literal al tipo numérico del proveedor.

        Valida además los identificadores: solo funciones conocidas
        seguidas de '(' y constantes conocidas que no lo estén.
        """
        wrapper = self._provider.number_type
        stream = io.StringIO(expression)
        tokens = list(tokenize.generate_tokens(stream.readline))
        promoted_tokens = []

        for index, tok in enumerate(tokens):
            if tok.type == token.NUMBER:
                if tok.string.lower().endswith("j"):
                    raise EvaluationFailure("Números complejos no permitidos")
                promoted = f'{wrapper}("{tok.string}")'
                tok = tokenize.TokenInfo(tok.type, promoted, tok.start, tok.end, tok.line)
            elif tok.type == token.NAME:
                self._validate_identifier(tok.string, tokens[index + 1 :])
            elif tok.type == token.STRING:
                raise EvaluationFailure("Expresión contiene operadores no permitidos")
            promoted_tokens.append(tok)

        return tokenize.untokenize(promoted_tokens)

    def _validate_identifier(self, name: str, following: list):
        next_text = next(
            (tok.string for tok in following if tok.type not in (token.NL, token.NEWLINE)),
            "",
        )
        if name in self._FUNCTION_IDENTIFIERS:
            if next_text != "(":
                raise EvaluationFailure(f"Falta '(' después de {name}")
            return
        if name in self._CONSTANT_IDENTIFIERS:
            if next_text == "(":
                raise EvaluationFailure(f"{name} no es una función")
            return
        raise EvaluationFailure(f"Identificador no permitido: {name}")
