"""Tests for the calculator state machine.

Run:
  pytest tests/test_state_machine.py -v
"""

import re

from hypothesis import given, strategies as st

from Calculator import MathEngine
from Calculator.StateMachine import (
    AddDigit,
    CalculatorState,
    ChooseOperation,
    Clear,
    DeleteDigit,
    DIGITS,
    Evaluate,
    MAX_INPUT_LENGTH,
    empty_state,
    transition,
)

TYPED_OPERAND = re.compile(r"\d*\.?\d*")


def press(*commands, state=None):
    state = state if state is not None else empty_state()
    for command in commands:
        state = transition(state, command)
    return state


def digits(text):
    return [AddDigit(char) for char in text]


commands = st.one_of(
    st.sampled_from(DIGITS).map(AddDigit),
    st.sampled_from(MathEngine.Operations).map(ChooseOperation),
    st.just(Clear()),
    st.just(DeleteDigit()),
    st.just(Evaluate()),
)


def assert_invariants(state):
    assert isinstance(state, CalculatorState)
    assert state.current_operand != ""
    assert state.previous_operand != ""
    assert state.operation is None or state.operation in MathEngine.Operations
    if state.overwrite:
        assert state.previous_operand is None
        assert state.operation is None
    elif state.current_operand is not None:
        # Anything not flagged as a result was typed by the user
        assert len(state.current_operand) <= MAX_INPUT_LENGTH
        assert TYPED_OPERAND.fullmatch(state.current_operand)


# --- Digit entry ---

def test_empty_state_has_nothing_set():
    state = empty_state()
    assert state.current_operand is None
    assert state.previous_operand is None
    assert state.operation is None
    assert state.overwrite is False


def test_typing_decimal_number():
    state = press(*digits("5.2"))
    assert state.current_operand == "5.2"


def test_second_decimal_point_is_ignored():
    state = press(*digits("5.2"))
    assert transition(state, AddDigit(".")) == state


def test_leading_zero_is_not_repeated():
    state = press(*digits("00"))
    assert state.current_operand == "0"


def test_zero_after_other_digits_is_appended():
    assert press(*digits("100")).current_operand == "100"


def test_input_is_capped():
    state = press(*digits("1234567890123"))
    assert state.current_operand == "123456789012"
    assert transition(state, AddDigit("4")) == state


def test_decimal_point_first():
    assert press(AddDigit(".")).current_operand == "."


def test_unknown_digit_is_ignored():
    state = press(*digits("12"))
    assert transition(state, AddDigit("a")) == state


# --- Operators ---

def test_operator_on_empty_state_is_ignored():
    assert transition(empty_state(), ChooseOperation(MathEngine.ADD)) == empty_state()


def test_first_operator_moves_current_to_previous():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD))
    assert state.previous_operand == "2"
    assert state.current_operand is None
    assert state.operation == MathEngine.ADD


def test_operator_can_be_changed_before_second_operand():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), ChooseOperation(MathEngine.MULTIPLY))
    assert state.previous_operand == "2"
    assert state.operation == MathEngine.MULTIPLY


def test_unknown_operator_is_ignored():
    state = press(AddDigit("2"))
    assert transition(state, ChooseOperation("%")) == state


def test_chained_operators_evaluate_left_to_right():
    state = press(
        AddDigit("2"), ChooseOperation(MathEngine.ADD),
        AddDigit("3"), ChooseOperation(MathEngine.MULTIPLY),
    )
    assert state.previous_operand == "5"
    assert state.operation == MathEngine.MULTIPLY
    assert state.current_operand is None

    state = press(AddDigit("4"), Evaluate(), state=state)
    assert state.current_operand == "20"


# --- Evaluate ---

def test_evaluate_simple_sum():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), AddDigit("3"), Evaluate())
    assert state.current_operand == "5"
    assert state.overwrite is True
    assert state.previous_operand is None
    assert state.operation is None


def test_evaluate_without_second_operand_is_ignored():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD))
    assert transition(state, Evaluate()) == state


def test_evaluate_on_empty_state_is_ignored():
    assert transition(empty_state(), Evaluate()) == empty_state()


def test_division_by_zero_gives_infinity():
    state = press(AddDigit("1"), ChooseOperation(MathEngine.DIVIDE), AddDigit("0"), Evaluate())
    assert state.current_operand == "Infinity"
    assert state.overwrite is True


def test_float_artifacts_are_rounded_away():
    state = press(*digits("0.1"), ChooseOperation(MathEngine.ADD), *digits("0.2"), Evaluate())
    assert state.current_operand == "0.3"


def test_unparseable_operand_evaluates_to_absent():
    state = press(AddDigit("."), ChooseOperation(MathEngine.ADD), AddDigit("3"), Evaluate())
    assert state.current_operand is None
    assert state.overwrite is True


def test_digit_after_result_starts_new_operand():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), AddDigit("3"), Evaluate(), AddDigit("7"))
    assert state.current_operand == "7"
    assert state.overwrite is False


def test_operator_after_result_continues_from_result():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), AddDigit("3"), Evaluate(),
                  ChooseOperation(MathEngine.SUBTRACT))
    assert state.previous_operand == "5"
    assert state.overwrite is False

    state = press(AddDigit("8"), Evaluate(), state=state)
    assert state.current_operand == "-3"


# --- Delete / Clear ---

def test_delete_drops_last_character():
    assert press(*digits("123"), DeleteDigit()).current_operand == "12"


def test_delete_last_character_leaves_operand_absent():
    assert press(AddDigit("7"), DeleteDigit()).current_operand is None


def test_delete_on_absent_operand_is_ignored():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD))
    assert transition(state, DeleteDigit()) == state


def test_delete_after_result_clears_it():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), AddDigit("3"), Evaluate(), DeleteDigit())
    assert state.current_operand is None
    assert state.overwrite is False


def test_clear_resets_everything():
    state = press(AddDigit("2"), ChooseOperation(MathEngine.ADD), AddDigit("3"))
    assert transition(state, Clear()) == empty_state()


def test_unknown_command_is_ignored():
    state = press(*digits("42"))
    assert transition(state, "not a command") == state


# --- Properties ---

@given(st.lists(commands, max_size=40))
def test_every_reachable_state_keeps_invariants(command_list):
    state = empty_state()
    for command in command_list:
        state = transition(state, command)
        assert_invariants(state)


@given(st.lists(commands, max_size=40))
def test_clear_always_returns_empty_state(command_list):
    state = press(*command_list)
    assert transition(state, Clear()) == empty_state()


@given(st.lists(commands, max_size=40))
def test_repeated_delete_stops_at_absent_operand(command_list):
    state = press(*command_list)
    for _ in range(MAX_INPUT_LENGTH + 2):
        state = transition(state, DeleteDigit())
    assert state.current_operand is None
    assert transition(state, DeleteDigit()) == state


@given(
    st.sampled_from("123456789"),
    st.sampled_from(MathEngine.Operations),
    st.sampled_from("123456789"),
    st.sampled_from(MathEngine.Operations),
    st.sampled_from("123456789"),
)
def test_chaining_matches_nested_evaluation(a, op1, b, op2, c):
    state = press(AddDigit(a), ChooseOperation(op1), AddDigit(b), ChooseOperation(op2), AddDigit(c), Evaluate())
    expected = MathEngine.evaluate(MathEngine.evaluate(a, b, op1), c, op2)
    assert state.current_operand == expected
