# MathEngine.py
"""
Numeric engine for the Precision Calculator.

Pipeline
--------
1) Parser: turns an operand string into a float (None when it is not a number).
2) Evaluator: applies one of the four binary operators.
3) Rounder: rounds to 12 significant digits to hide float artifacts.
4) Formatter: renders operands for display with US-style integer grouping.

Every function here is pure and total: bad input never raises, it degrades
to an empty result instead.
"""

import math
from decimal import Decimal, InvalidOperation


# Operator glyphs, as shown on the buttons and in the display
ADD = "+"
SUBTRACT = "−"  # U+2212
MULTIPLY = "×"  # U+00D7
DIVIDE = "÷"    # U+00F7

Operations = [ADD, SUBTRACT, MULTIPLY, DIVIDE]

SIGNIFICANT_DIGITS = 12

# Plain notation is used for decimal exponents inside this range,
# scientific notation outside of it.
PLAIN_EXPONENT_MIN = -6
PLAIN_EXPONENT_MAX = 21


# -----------------------------
# Utilities / small helpers
# -----------------------------

def isOp(symbol):
    """Return index of a known operator or -1 if unknown."""
    try:
        return Operations.index(symbol)
    except ValueError:
        return -1


def parse_operand(operand):
    """Return the operand as a float, or None if it is absent or malformed.

    Accepts the strings the calculator produces itself, including
    "12." (trailing point) and the non-finite results "Infinity" / "NaN".
    """
    if not operand:
        return None
    try:
        return float(operand)
    except (TypeError, ValueError):
        return None


def apply_operation(prev, current, operation):
    """Apply a binary operator to two floats.

    Division by zero follows IEEE semantics (±inf, or NaN for 0/0)
    instead of raising. Returns None for an unknown operator.
    """
    if operation == ADD:
        return prev + current
    elif operation == SUBTRACT:
        return prev - current
    elif operation == MULTIPLY:
        return prev * current
    elif operation == DIVIDE:
        if current == 0:
            if prev == 0 or math.isnan(prev):
                return math.nan
            # sign of the zero divisor counts too: 1 / -0.0 is -inf
            return math.copysign(math.inf, prev) * math.copysign(1.0, current)
        return prev / current
    return None


def round_significant(value, digits=SIGNIFICANT_DIGITS):
    """Round a float to the given number of significant digits."""
    if not math.isfinite(value):
        return value
    return float(f"{value:.{digits}g}")


def render_number(value):
    """Render a float as the shortest decimal string that reads back exactly.

    Integers come out without a trailing ".0", negative zero becomes "0",
    and very large or very small magnitudes switch to "1.5e+25" notation.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    # repr() is the shortest round-tripping form; Decimal lets us re-layout it
    number = Decimal(repr(value)).normalize()
    if number.is_zero():
        return "0"

    exponent = number.adjusted()
    if PLAIN_EXPONENT_MIN <= exponent < PLAIN_EXPONENT_MAX:
        return format(number, "f")
    return format(number, "e")


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(previous_operand, current_operand, operation):
    """Compute "previous <operation> current" and return it as a string.

    Returns "" when either operand does not parse or the operator is
    unknown.
    """
    prev = parse_operand(previous_operand)
    current = parse_operand(current_operand)
    if prev is None or current is None:
        return ""

    result = apply_operation(prev, current, operation)
    if result is None:
        return ""
    return render_number(round_significant(result))


def group_integer(integer_part):
    """Insert thousands separators into a run of digits ("1234567" -> "1,234,567").

    Whole numbers in exponent form ("1e+21") are written out in full and
    grouped too. Other non-digit text ("1e-7") is returned as it is.
    """
    sign = ""
    if integer_part.startswith("-"):
        sign, integer_part = "-", integer_part[1:]
    if not integer_part:
        return sign + "0"
    if integer_part.isdigit():
        return sign + f"{int(integer_part):,}"

    try:
        number = Decimal(integer_part)
    except InvalidOperation:
        return sign + integer_part
    if number.is_finite() and number == number.to_integral_value():
        return sign + f"{int(number):,}"
    return sign + integer_part


def format_operand(operand):
    """Render an operand for the display.

    The integer part gets thousands separators; whatever follows the
    decimal point is kept verbatim, including an empty tail, so "12."
    stays "12." while the user is still typing.
    """
    if operand is None or operand == "":
        return ""

    if operand == "Infinity":
        return "∞"
    if operand == "-Infinity":
        return "-∞"
    if operand == "NaN":
        return "NaN"

    integer_part, point, decimal_part = operand.partition(".")
    if not point:
        return group_integer(integer_part)
    return f"{group_integer(integer_part)}.{decimal_part}"
