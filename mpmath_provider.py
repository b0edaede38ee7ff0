"""Proveedor matemático basado en mpmath.

Evalúa con la precisión de un double (15 dígitos) y entrega el resultado
como float; sirve como alternativa a PythonMathProvider.
"""

from __future__ import annotations

from formula_evaluator import EvaluationFailure

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    number_type = "mpf"

    def __init__(self, digits: int = 15):
        self._digits = max(8, digits)

    def working_precision(self):
        return mp.workdps(self._digits)

    @staticmethod
    def _factorial(x):
        if not mp.isfinite(x):
            raise ValueError("factorial no admite infinito o NaN")
        if x < 0:
            raise ValueError("factorial requiere un número no negativo")
        return mp.factorial(x)

    @staticmethod
    def _cbrt(x):
        if x < 0:
            return -mp.cbrt(-x)
        return mp.cbrt(x)

    @staticmethod
    def _nth_root(x, n=2):
        if n == 0:
            raise ValueError("Raíz de índice cero")
        if x < 0:
            if mp.floor(n) != n or int(n) % 2 != 1:
                raise ValueError("Raíz par de un número negativo")
            return -mp.root(-x, int(n))
        if mp.floor(n) == n:
            return mp.root(x, int(n))
        return x ** (1 / n)

    @staticmethod
    def to_float(value) -> float:
        if isinstance(value, (mp.mpc, complex)):
            raise EvaluationFailure("Resultado complejo")
        return float(value)

    def build_namespace(self) -> dict:
        return {
            "sin": mp.sin,
            "cos": mp.cos,
            "tan": mp.tan,
            "asin": mp.asin,
            "acos": mp.acos,
            "atan": mp.atan,
            "log": mp.log,
            "log10": mp.log10,
            "sqrt": mp.sqrt,
            "cbrt": self._cbrt,
            "exp": mp.exp,
            "nthRoot": self._nth_root,
            "factorial": self._factorial,
            "mpf": mp.mpf,
            "π": mp.mpf(mp.pi),
            "pi": mp.mpf(mp.pi),
            "e": mp.mpf(mp.e),
        }
