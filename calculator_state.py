"""Estado de la sesión de la calculadora científica."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace


class AngleMode(str, enum.Enum):
    """Unidad angular aplicada a las funciones trigonométricas."""

    DEG = "DEG"
    RAD = "RAD"

    @classmethod
    def parse(cls, value) -> "AngleMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError as exc:
            raise ValueError("El modo debe ser 'DEG' o 'RAD'") from exc

    def toggled(self) -> "AngleMode":
        return AngleMode.RAD if self is AngleMode.DEG else AngleMode.DEG


@dataclass(frozen=True)
class CalculatorState:
    """Registro único de la sesión.

    Cada evento produce un registro nuevo; la sesión conserva el último.
    ``display`` es siempre un literal numérico, ``"Error"`` o ``"0"``.
    """

    display: str = "0"
    expression: str = ""
    memory: float = 0
    angle_mode: AngleMode = AngleMode.DEG
    previous_answer: float = 0
    waiting_for_operand: bool = False
    has_error: bool = False

    def update(self, **changes) -> "CalculatorState":
        return replace(self, **changes)

    def snapshot(self) -> dict:
        """Vista de solo lectura para el renderizado."""
        return {
            "display": self.display,
            "expression": self.expression,
            "angle_mode": self.angle_mode,
            "memory": self.memory,
        }


INITIAL_STATE = CalculatorState()
