"""Punto de entrada de la calculadora científica."""

import logging

import config
from calculator_engine import CalculatorEngine
from calculator_session import CalculatorSession
from calculator_state import INITIAL_STATE, AngleMode


def build_session() -> CalculatorSession:
    if config.USE_MPMATH:
        from mpmath_provider import MPMathProvider

        provider = MPMathProvider(digits=config.MPMATH_DIGITS)
    else:
        provider = None

    initial = INITIAL_STATE.update(
        angle_mode=AngleMode.parse(config.DEFAULT_ANGLE_MODE),
    )
    return CalculatorSession(engine=CalculatorEngine(provider), initial_state=initial)


def main():
    import tkinter as tk

    from calculator_ui import CalculatorApp

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    root = tk.Tk()
    root.geometry(config.WINDOW_GEOMETRY)
    root.minsize(*config.WINDOW_MIN_SIZE)
    CalculatorApp(root, session=build_session())
    root.mainloop()


if __name__ == "__main__":
    main()
