import pytest

from Calculator import MathEngine
from Calculator.KeyBindings import command_for_key, commands_for_paste
from Calculator.StateMachine import (
    AddDigit,
    ChooseOperation,
    Clear,
    DeleteDigit,
    Evaluate,
    empty_state,
    transition,
)


@pytest.mark.parametrize("key", list("0123456789."))
def test_digit_keys(key):
    assert command_for_key(key) == AddDigit(key)


@pytest.mark.parametrize("key, operation", [
    ("+", MathEngine.ADD),
    ("-", MathEngine.SUBTRACT),
    ("*", MathEngine.MULTIPLY),
    ("/", MathEngine.DIVIDE),
])
def test_operator_keys(key, operation):
    assert command_for_key(key) == ChooseOperation(operation)


@pytest.mark.parametrize("key, command", [
    ("Enter", Evaluate()),
    ("=", Evaluate()),
    ("Backspace", DeleteDigit()),
    ("Escape", Clear()),
])
def test_control_keys(key, command):
    assert command_for_key(key) == command


@pytest.mark.parametrize("key", ["a", "", "Shift", ",", "%"])
def test_unbound_keys(key):
    assert command_for_key(key) is None


def test_paste_keeps_digits_and_point():
    assert commands_for_paste(" 1,234.5\n") == [AddDigit(c) for c in "1234.5"]


def test_paste_of_nothing():
    assert commands_for_paste("") == []
    assert commands_for_paste(None) == []
    assert commands_for_paste("abc") == []


def test_typed_session():
    state = empty_state()
    for key in ["1", "2", "*", "3", "Enter"]:
        state = transition(state, command_for_key(key))
    assert state.current_operand == "36"
