"""
Formato de números para la pantalla de la calculadora.

Reglas:
    - |x| > 1e15 o 0 < |x| < 1e-6: notación científica con 6 decimales.
    - Texto con punto decimal y más de 12 caracteres: 10 cifras
      significativas.
    - "Error" y cualquier texto no numérico se devuelven sin cambios.

Aplicar el formato sobre un texto ya formateado no lo modifica.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

ERROR_TEXT = "Error"

SCI_UPPER_LIMIT = 1e15
SCI_LOWER_LIMIT = 1e-6
EXPONENTIAL_DIGITS = 6
MAX_PLAIN_LENGTH = 12
SIGNIFICANT_DIGITS = 10

_LEADING_NUMBER_RE = re.compile(
    r"^\s*(?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def parse_number(text: str) -> float | None:
    """Lee el número al inicio del texto (``"12abc"`` -> 12.0).

    Devuelve None si el texto no empieza por un número.
    """
    match = _LEADING_NUMBER_RE.match(text or "")
    if not match:
        return None
    return float(match.group("number"))


def number_to_string(value) -> str:
    """Representación más corta que conserva el valor.

    Los enteros se muestran sin parte decimal y solo se usa exponente
    fuera del rango [1e-6, 1e21).
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    text = repr(value)
    mantissa, _, exponent = text.partition("e")
    if exponent:
        power = int(exponent)
        if power < -6 or power >= 21:
            return f"{mantissa}e{power:+d}"
        text = format(Decimal(text), "f")

    if text.endswith(".0"):
        text = text[:-2]
    return text


def number_to_plain_string(value) -> str:
    """Como number_to_string pero sin exponente, para la expresión.

    En la expresión una 'e' siempre es la constante, así que
    ``1e-7`` se escribe ``0.0000001``.
    """
    text = number_to_string(value)
    if "e" not in text:
        return text
    return format(Decimal(repr(float(value))), "f")


def to_exponential(value: float, digits: int = EXPONENTIAL_DIGITS) -> str:
    mantissa, _, exponent = f"{value:.{digits}e}".partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def to_precision(value: float, digits: int = SIGNIFICANT_DIGITS) -> str:
    """Redondea a ``digits`` cifras significativas sin quitar ceros."""
    if value == 0:
        return "0." + "0" * (digits - 1)

    _, _, exponent = f"{value:.{digits - 1}e}".partition("e")
    power = int(exponent)
    if power < -6 or power >= digits:
        return to_exponential(value, digits - 1)
    return f"{value:.{digits - 1 - power}f}"


def format_display(text: str) -> str:
    if text == ERROR_TEXT:
        return text

    value = parse_number(text)
    if value is None:
        return text

    magnitude = abs(value)
    if magnitude > SCI_UPPER_LIMIT or 0 < magnitude < SCI_LOWER_LIMIT:
        return to_exponential(value)

    if "." in text and len(text) > MAX_PLAIN_LENGTH:
        return to_precision(value)

    return text


def format_number(value) -> str:
    return format_display(number_to_string(value))
