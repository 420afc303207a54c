# StateMachine.py
"""
Calculator state machine.

The whole calculator is one immutable CalculatorState plus a pure
transition(state, command) function. The UI turns every button press or
key press into one of the five command types below, feeds it through
transition() and redraws from whatever comes back.

Commands
--------
- AddDigit(digit)            "0".."9" or "."
- ChooseOperation(operation) one of MathEngine.Operations
- Clear()
- DeleteDigit()
- Evaluate()

Operators chain strictly left to right: "2 + 3 × 4" is (2 + 3) × 4 = 20.
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from . import MathEngine

# Longest operand the user can type (results may be longer)
MAX_INPUT_LENGTH = 12

DIGITS = ["0", "1", "2", "3", "4", "5", "6", "7", "8", "9", "."]


@dataclass(frozen=True)
class CalculatorState:
    current_operand: Optional[str] = None
    previous_operand: Optional[str] = None
    operation: Optional[str] = None
    # True right after EVALUATE: the next digit starts a fresh operand
    overwrite: bool = False


def empty_state():
    """The initial state, also what CLEAR returns."""
    return CalculatorState()


# -----------------------------
# Commands (closed set)
# -----------------------------

@dataclass(frozen=True)
class AddDigit:
    digit: str


@dataclass(frozen=True)
class ChooseOperation:
    operation: str


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class DeleteDigit:
    pass


@dataclass(frozen=True)
class Evaluate:
    pass


Command = Union[AddDigit, ChooseOperation, Clear, DeleteDigit, Evaluate]


def _result_or_none(result):
    # MathEngine.evaluate returns "" when it cannot compute anything
    return result if result else None


# -----------------------------
# Transitions
# -----------------------------

def add_digit(state, digit):
    if digit not in DIGITS:
        return state

    if state.overwrite:
        return replace(state, current_operand=digit, overwrite=False)

    current = state.current_operand or ""
    if digit == "0" and current == "0":
        return state
    if digit == "." and "." in current:
        return state
    if len(current) >= MAX_INPUT_LENGTH:
        return state

    return replace(state, current_operand=current + digit)


def choose_operation(state, operation):
    if MathEngine.isOp(operation) == -1:
        return state

    if not state.current_operand and not state.previous_operand:
        return state

    # Second operand not typed yet: the user is just changing the operator
    if not state.current_operand:
        return replace(state, operation=operation)

    if not state.previous_operand:
        return replace(
            state,
            previous_operand=state.current_operand,
            current_operand=None,
            operation=operation,
            overwrite=False,
        )

    # Chaining: fold the pending expression into the left operand
    result = MathEngine.evaluate(state.previous_operand, state.current_operand, state.operation)
    return replace(
        state,
        previous_operand=_result_or_none(result),
        current_operand=None,
        operation=operation,
        overwrite=False,
    )


def delete_digit(state):
    if state.overwrite:
        return replace(state, current_operand=None, overwrite=False)

    if not state.current_operand:
        return state

    if len(state.current_operand) == 1:
        return replace(state, current_operand=None)

    return replace(state, current_operand=state.current_operand[:-1])


def evaluate(state):
    if not state.operation or not state.current_operand or not state.previous_operand:
        return state

    result = MathEngine.evaluate(state.previous_operand, state.current_operand, state.operation)
    return CalculatorState(
        current_operand=_result_or_none(result),
        previous_operand=None,
        operation=None,
        overwrite=True,
    )


def transition(state, command):
    """Return the state that follows `state` after `command`.

    Total over every state/command pair: anything that does not apply
    returns `state` unchanged.
    """
    if isinstance(command, AddDigit):
        return add_digit(state, command.digit)
    elif isinstance(command, ChooseOperation):
        return choose_operation(state, command.operation)
    elif isinstance(command, Clear):
        return empty_state()
    elif isinstance(command, DeleteDigit):
        return delete_digit(state)
    elif isinstance(command, Evaluate):
        return evaluate(state)
    return state
