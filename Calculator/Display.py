# Display.py
"""View model for the calculator display.

Turns a CalculatorState into the two lines the window shows, without
touching Qt, so the UI only has to copy strings into widgets.
"""

from collections import namedtuple

from .MathEngine import format_operand

# Point sizes for the current-operand line, picked by text length
FONT_SIZE_LARGE = 45
FONT_SIZE_MEDIUM = 35
FONT_SIZE_SMALL = 29

DisplayText = namedtuple("DisplayText", ["previous", "current", "font_size"])


def font_size_for(text):
    """Shrink the main display as the number gets longer."""
    if len(text) > 9:
        return FONT_SIZE_SMALL
    elif len(text) > 6:
        return FONT_SIZE_MEDIUM
    return FONT_SIZE_LARGE


def previous_line(state):
    """Left operand and pending operator, e.g. "1,234 ×"."""
    return f"{format_operand(state.previous_operand)} {state.operation or ''}".strip()


def current_line(state):
    return format_operand(state.current_operand) or "0"


def render(state):
    current = current_line(state)
    return DisplayText(previous_line(state), current, font_size_for(current))


def clipboard_value(state):
    """Plain number for the clipboard: the display text without separators."""
    return current_line(state).replace(",", "")
