import pytest

tk = pytest.importorskip("tkinter")

import config
from calculator_session import Digit


@pytest.fixture
def root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    yield root
    root.destroy()


def test_window_title_comes_from_config(root, monkeypatch):
    from calculator_ui import CalculatorApp

    monkeypatch.setattr(config, "APP_TITLE", "Calculadora de prueba")
    CalculatorApp(root)
    assert root.title() == "Calculadora de prueba"


def test_dispatch_updates_session(root):
    from calculator_ui import CalculatorApp

    app = CalculatorApp(root)
    app._dispatch(Digit("7"))
    assert app.session.state.display == "7"
