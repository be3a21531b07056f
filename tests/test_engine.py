"""Tests for RPNEngine: operate, is_valid_input, process_candidate_stack.

Value checks run on both backends via the ``any_engine`` fixture and compare
numerically; representation checks (trimmed strings) use the decimal engine.
"""

import pytest

from rpncalc.backends import DecimalBackend
from rpncalc.engine import RPNEngine
from rpncalc.models import ErrorKind


OPERATORS = ("+", "-", "*", "/")


def values(stack):
    """Stack entries as floats, operators left as-is."""
    return [v if v in OPERATORS else float(v) for v in stack]


# --- operate: values on both backends ---

@pytest.mark.parametrize(
    "a, b, op, expected",
    [
        ("3", "7", "+", 10),
        ("5e2", "3e2", "+", 800),
        (-1512.3, 1515.3, "+", 3),
        ("7", "8", "-", -1),
        ("0", "100", "-", -100),
        (1.38e5, 138005.2, "-", -5.2),
        ("-2", "-3", "*", 6),
        ("0", "70E-100", "*", 0),
        ("765.23", -138e-2, "*", -1056.0174),
        ("1.52", 30e5, "*", 4560000),
        (5, 8, "/", 0.625),
        ("70", "1", "/", 70),
    ],
)
def test_operate_values(any_engine, a, b, op, expected):
    result = any_engine.operate(a, b, op)
    assert result.ok
    assert float(result) == pytest.approx(expected)


def test_operate_nonzero_results(any_engine):
    assert float(any_engine.operate("3", "0", "+")) != 0
    assert float(any_engine.operate("17", "15", "-")) != 0


# --- operate: decimal representation ---

def test_decimal_results_are_strings(engine):
    assert engine.operate("3", "7", "+").value == "10"
    assert engine.operate("-1512.3", "1515.3", "+").value == "3"
    assert engine.operate("1.38E5", "138005.2", "-").value == "-5.2"
    assert engine.operate("765.23", "-138e-2", "*").value == "-1056.0174"


def test_no_trailing_zeros(engine):
    assert engine.operate("1.52", 30e5, "*").value == "4560000"
    assert engine.operate("140", "2", "/").value == "70"
    assert engine.operate("5", "8", "/").value == "0.625"
    assert engine.operate("0", "70E-100", "*").value == "0"


def test_division_truncates_to_precision(engine):
    assert engine.operate("2", "3", "/").value == "0.66666666666666"
    assert engine.operate("-1", "3", "/").value == "-0.33333333333333"


def test_precision_is_configurable():
    engine = RPNEngine(backend=DecimalBackend(), precision=4)
    assert engine.operate("1", "3", "/").value == "0.3333"


def test_precision_widens_for_precise_operands(engine):
    a = "0.00000000000000000001"
    assert engine.operate(a, a, "+").value == "0.00000000000000000002"
    assert engine.operate(a, "1", "-").value == "-0.99999999999999999999"
    assert engine.operate("0.0000001", "0.00000001", "*").value == "0.000000000000001"


def test_big_literals_keep_all_digits(engine):
    a = "123456789012345678901234567890"
    assert engine.operate(a, "1", "+").value == "123456789012345678901234567891"
    assert engine.operate("1.678e+32", "1", "+").value == "167800000000000000000000000000001"


def test_negative_zero_renders_as_zero(engine):
    assert engine.operate("-0.5", "0", "*").value == "0"


# --- operate: errors ---

def test_operate_without_arguments_is_invalid_operator(any_engine):
    assert any_engine.operate().error == ErrorKind.INVALID_OPERATOR


@pytest.mark.parametrize("op", ["", None, "^", "%", "plus"])
def test_unsupported_operator(any_engine, op):
    # Checked before operands, so bad operands don't change the outcome.
    assert any_engine.operate("1", "2", op).error == ErrorKind.INVALID_OPERATOR
    assert any_engine.operate("x", None, op).error == ErrorKind.INVALID_OPERATOR


@pytest.mark.parametrize("a, b", [("a", "1"), ("1", "e20"), (None, "2"), ("2", None), ("-", "3")])
def test_invalid_operand(any_engine, a, b):
    for op in "+-*/":
        assert any_engine.operate(a, b, op).error == ErrorKind.INVALID_OPERAND


@pytest.mark.parametrize("x", ["5", "-3.2", "0", "1e300", 7])
@pytest.mark.parametrize("zero", ["0", "0.0", "-0", "0e10", 0, 0.0])
def test_division_by_zero(any_engine, x, zero):
    assert any_engine.operate(x, zero, "/").error == ErrorKind.DIVISION_BY_ZERO


@pytest.mark.parametrize("huge", ["1e999999999999", "1e-999999999999", "0e999999999999"])
def test_oversized_exponent_is_invalid_operand(any_engine, huge):
    assert any_engine.operate(huge, "1", "+").error == ErrorKind.INVALID_OPERAND
    assert any_engine.operate("1", huge, "/").error == ErrorKind.INVALID_OPERAND
    assert not any_engine.is_valid_input([huge])


def test_large_exponent_within_bound(engine):
    assert engine.operate("1e300", "1e300", "*").value == "1" + "0" * 600


@pytest.mark.parametrize("a, b, op", [("1e400", "1", "+"), ("1e300", "1e300", "*"), ("-1e308", "1e-308", "/")])
def test_float_overflow_is_invalid_operand(float_engine, a, b, op):
    assert float_engine.operate(a, b, op).error == ErrorKind.INVALID_OPERAND


def test_float_backend_keeps_native_values(float_engine):
    result = float_engine.operate("5", "8", "/")
    assert isinstance(result.value, float)
    assert result.value == 0.625


def test_custom_operator_set_restricts_operations():
    engine = RPNEngine(backend=DecimalBackend(), operators=("+", "-"))
    assert engine.operate("2", "3", "*").error == ErrorKind.INVALID_OPERATOR
    assert engine.operate("2", "3", "+").value == "5"


# --- is_valid_input ---

def test_is_valid_input_accepts(engine):
    assert engine.is_valid_input([])
    assert engine.is_valid_input(["3"])
    assert engine.is_valid_input(["3", "4"])
    assert engine.is_valid_input(["3", "4", "+"])
    assert engine.is_valid_input(["3", "4", "+", "-", "*", "/"])
    assert engine.is_valid_input(
        [".7", "1.5", "0.567", "-.80", "-2.98", "1.678e+32", "67E+5", "43E2",
         "70e-54", "-80E-79", "-", "+", "+", "-", "-", "-"]
    )


def test_is_valid_input_rejects(engine):
    assert not engine.is_valid_input(["+"])
    assert not engine.is_valid_input(["a"])
    assert not engine.is_valid_input(["3", "-", "4"])
    assert not engine.is_valid_input(["3", "4", "-", "e20"])
    assert not engine.is_valid_input(["3", "4", "-", "a"])


def test_is_valid_input_accepts_backend_values(float_engine):
    assert float_engine.is_valid_input([13.0, "2", "+"])


# --- process_candidate_stack ---

def test_empty_stack_reduces_to_empty(any_engine):
    reduction = any_engine.process_candidate_stack([])
    assert reduction.stack == []
    assert reduction.complete


def test_division_by_zero_aborts_reduction(any_engine):
    reduction = any_engine.process_candidate_stack(["5", "2", "0", "/", "+"])
    assert reduction.division_by_zero
    assert reduction.stack == []


def test_partial_reduction_keeps_pending_operators(any_engine):
    reduction = any_engine.process_candidate_stack(["7", "9", "+", "-", "-", "-"])
    assert values(reduction.stack) == [16, "-", "-", "-"]
    assert reduction.error == ErrorKind.INVALID_OPERAND


def test_partial_reduction_returns_original_remainder(engine):
    reduction = engine.process_candidate_stack(["1", "2", "+", "*", "4", "+"])
    assert reduction.stack == ["3", "*", "4", "+"]


@pytest.mark.parametrize(
    "tokens, expected",
    [
        (["5", "8", "+"], [13]),
        (["5", "5", "5", "8", "+", "+", "-", "13", "+"], [0]),
        (["-3", "-2", "*", "5", "+"], [11]),
        (["5", "9", "1", "-", "/"], [0.625]),
        (["1", "2", "3"], [1, 2, 3]),
        (["1", "2", "3", "+"], [1, 5]),
    ],
)
def test_reduces(any_engine, tokens, expected):
    reduction = any_engine.process_candidate_stack(tokens)
    assert reduction.complete
    assert values(reduction.stack) == pytest.approx(expected)


def test_reduction_leaves_input_untouched(engine):
    tokens = ["5", "8", "+"]
    engine.process_candidate_stack(tokens)
    assert tokens == ["5", "8", "+"]


def test_decimal_reduction_values_are_strings(engine):
    assert engine.process_candidate_stack(["5", "9", "1", "-", "/"]).stack == ["0.625"]
