# KeyBindings.py
"""Keyboard and clipboard input, translated into state machine commands.

Key names follow the usual key-event naming ("7", "+", "Enter",
"Backspace", "Escape", ...). The UI converts Qt key events into these
names before calling command_for_key().
"""

from . import MathEngine
from .StateMachine import AddDigit, ChooseOperation, Clear, DeleteDigit, Evaluate, DIGITS

# Keyboard operator keys -> operator glyphs
OPERATOR_KEYS = {
    "+": MathEngine.ADD,
    "-": MathEngine.SUBTRACT,
    "*": MathEngine.MULTIPLY,
    "/": MathEngine.DIVIDE,
}

EVALUATE_KEYS = ["Enter", "Return", "="]


def command_for_key(key):
    """Return the command for a key name, or None if the key is not bound."""
    if key in DIGITS:
        return AddDigit(key)
    if key in OPERATOR_KEYS:
        return ChooseOperation(OPERATOR_KEYS[key])
    if key in EVALUATE_KEYS:
        return Evaluate()
    if key == "Backspace":
        return DeleteDigit()
    if key == "Escape":
        return Clear()
    return None


def commands_for_paste(text):
    """Turn pasted text into AddDigit commands.

    Only digits and the decimal point are kept, so "1,234.5" pastes as
    1234.5. The state machine still applies its own rules (one point,
    input cap) to each digit.
    """
    if not text:
        return []
    return [AddDigit(char) for char in text.strip() if char in DIGITS]
