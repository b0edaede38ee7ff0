import pytest

from calculator_session import Backspace, ClearAll, Decimal, Digit, Evaluate, Operator
from keyboard_bindings import event_for_key


@pytest.mark.parametrize(
    "key, keysym, expected",
    [
        ("7", "7", Digit("7")),
        (".", "period", Decimal()),
        ("+", "plus", Operator("+")),
        ("-", "minus", Operator("−")),
        ("*", "asterisk", Operator("×")),
        ("/", "slash", Operator("÷")),
        ("(", "parenleft", Operator("(")),
        (")", "parenright", Operator(")")),
        ("=", "equal", Evaluate()),
        ("\r", "Return", Evaluate()),
        ("", "KP_Enter", Evaluate()),
        ("\x1b", "Escape", ClearAll()),
        ("\b", "BackSpace", Backspace()),
    ],
)
def test_key_mapping(key, keysym, expected):
    assert event_for_key(key, keysym) == expected


def test_mapping_without_keysym():
    assert event_for_key("3") == Digit("3")
    assert event_for_key("Enter") == Evaluate()
    assert event_for_key("Backspace") == Backspace()


@pytest.mark.parametrize("key, keysym", [("a", "a"), ("", "Shift_L"), ("٣", None), ("%", "percent")])
def test_unbound_keys(key, keysym):
    assert event_for_key(key, keysym) is None
