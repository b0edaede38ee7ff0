import config
import main
from calculator_state import AngleMode
from mpmath_provider import MPMathProvider
from regression_checks import inspect_keys, run_regressions


def test_regressions_pass(capsys):
    run_regressions()
    assert "All regression checks passed." in capsys.readouterr().out


def test_inspect_keys_prints_states(capsys):
    inspect_keys("12*3=")
    out = capsys.readouterr().out
    assert "final display:  36" in out


def test_build_session_from_config(monkeypatch):
    monkeypatch.setattr(config, "USE_MPMATH", True)
    monkeypatch.setattr(config, "DEFAULT_ANGLE_MODE", "rad")

    session = main.build_session()
    assert isinstance(session.engine.provider, MPMathProvider)
    assert session.state.angle_mode is AngleMode.RAD
    assert session.reset().angle_mode is AngleMode.RAD
