"""
Eventos de entrada y sesión de la calculadora.

Cada pulsación se traduce en un evento; ``reduce`` aplica el evento al
estado y devuelve el estado siguiente. CalculatorSession guarda el único
estado de la sesión y es lo único que la interfaz necesita tocar.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

import expression_assembler as assembler
import memory_register as memory
from calculator_engine import CalculatorEngine
from calculator_state import INITIAL_STATE, CalculatorState


# ── Eventos ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Digit:
    value: str

    def __post_init__(self):
        if len(self.value) != 1 or self.value not in "0123456789":
            raise ValueError(f"Dígito inválido: {self.value!r}")


@dataclass(frozen=True)
class Operator:
    value: str


@dataclass(frozen=True)
class Decimal:
    pass


@dataclass(frozen=True)
class Constant:
    value: str


@dataclass(frozen=True)
class Function:
    name: str


@dataclass(frozen=True)
class ToggleAngleMode:
    pass


@dataclass(frozen=True)
class ToggleSign:
    pass


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class ClearAll:
    pass


@dataclass(frozen=True)
class Evaluate:
    pass


@dataclass(frozen=True)
class InsertAnswer:
    pass


@dataclass(frozen=True)
class GenerateRandom:
    pass


@dataclass(frozen=True)
class MemoryAdd:
    pass


@dataclass(frozen=True)
class MemorySubtract:
    pass


@dataclass(frozen=True)
class MemoryRecall:
    pass


@dataclass(frozen=True)
class MemoryClear:
    pass


# ── Reductor ─────────────────────────────────────────────────────

def reduce(
    state: CalculatorState,
    event,
    *,
    engine: CalculatorEngine,
    initial: CalculatorState = INITIAL_STATE,
    rng=random.random,
) -> CalculatorState:
    """Aplica un evento al estado. Los eventos desconocidos no lo cambian."""
    if isinstance(event, Digit):
        return assembler.insert_digit(state, event.value)
    if isinstance(event, Operator):
        return assembler.insert_operator(state, event.value)
    if isinstance(event, Decimal):
        return assembler.insert_decimal(state)
    if isinstance(event, Constant):
        return assembler.insert_constant(state, event.value)
    if isinstance(event, Function):
        return assembler.apply_function(state, event.name)
    if isinstance(event, ToggleAngleMode):
        return assembler.toggle_angle_mode(state)
    if isinstance(event, ToggleSign):
        return assembler.toggle_sign(state)
    if isinstance(event, Backspace):
        return assembler.backspace(state)
    if isinstance(event, ClearAll):
        return assembler.clear_all(state, initial)
    if isinstance(event, Evaluate):
        return engine.evaluate(state)
    if isinstance(event, InsertAnswer):
        return assembler.insert_previous_answer(state)
    if isinstance(event, GenerateRandom):
        return assembler.generate_random(state, rng)
    if isinstance(event, MemoryAdd):
        return memory.memory_add(state)
    if isinstance(event, MemorySubtract):
        return memory.memory_subtract(state)
    if isinstance(event, MemoryRecall):
        return memory.memory_recall(state)
    if isinstance(event, MemoryClear):
        return memory.memory_clear(state)
    return state


class CalculatorSession:
    """Dueña del estado único de la calculadora."""

    def __init__(self, engine: CalculatorEngine | None = None,
                 initial_state: CalculatorState = INITIAL_STATE,
                 rng=random.random):
        self.engine = engine if engine is not None else CalculatorEngine()
        self._initial = initial_state
        self._rng = rng
        self._state = initial_state

    @property
    def state(self) -> CalculatorState:
        return self._state

    def dispatch(self, event) -> CalculatorState:
        self._state = reduce(
            self._state,
            event,
            engine=self.engine,
            initial=self._initial,
            rng=self._rng,
        )
        return self._state

    def dispatch_all(self, events) -> CalculatorState:
        for event in events:
            self.dispatch(event)
        return self._state

    def reset(self) -> CalculatorState:
        return self.dispatch(ClearAll())

    def snapshot(self) -> dict:
        return self._state.snapshot()
