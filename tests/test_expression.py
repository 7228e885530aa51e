"""
Tests for the arithmetic evaluator.
Run with: pytest tests/test_expression.py
"""

import pytest

from quickcalc.expression import (
    ExpressionError,
    evaluate,
    looks_like_expression,
    parse_expression,
)


# ---------------------------------------------------------------------------
# evaluate()
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("query,expected", [
    ("2+2*2", "6"),
    ("(2+2)*2", "8"),
    ("10%3", "1"),
    ("2^10", "1,024"),
    ("2**3", "8"),
    ("7 / 2", "3.5"),
    ("0.1 + 0.2", "0.3"),
    ("-(3 - 5)", "2"),
    ("--2+1", "3"),
])
def test_evaluate_vectors(query, expected):
    """Precedence, associativity and the supported operators."""
    result = evaluate(query)
    assert result is not None
    assert result.result == expected
    assert result.input_label == "Expression"


def test_evaluate_result_label_spells_integers():
    """Integral results get an English spelling; fractions get none."""
    assert evaluate("2^10").result_label == "One Thousand Twenty Four"
    assert evaluate("3-3").result_label == "Zero"
    assert evaluate("7/2").result_label == ""


def test_evaluate_trims_input():
    """The echoed input is the trimmed query."""
    assert evaluate("  1+1  ").input == "1+1"


@pytest.mark.parametrize("query", [
    "abc",
    "42",
    "-42",
    "+42",
    "+4.5",
    "3.14",
    "2 x 3",
    "",
])
def test_evaluate_gate_rejects(query):
    """Letters, bare numbers and empty input never evaluate."""
    assert evaluate(query) is None


@pytest.mark.parametrize("query", [
    "1/0",
    "5 % 0",
    "2+",
    "2)",
    "(*2)",
    "1..2+1",
    "(-8)^0.5",
    "10^400",
])
def test_evaluate_failures_give_none(query):
    """Malformed input, division by zero and non-finite results give None."""
    assert evaluate(query) is None


# ---------------------------------------------------------------------------
# parse_expression()
# ---------------------------------------------------------------------------

def test_power_is_left_to_right():
    """2^3^2 groups as (2^3)^2."""
    assert parse_expression("2^3^2") == 64


def test_modulo_keeps_dividend_sign():
    """-7 % 3 is -1, not 2."""
    assert parse_expression("-7 % 3") == -1


def test_missing_close_paren_is_tolerated():
    """An unterminated group at the end still evaluates."""
    assert parse_expression("(2+2") == 4
    assert parse_expression("2*(3+(4") == 14


def test_unconsumed_input_raises():
    """Trailing tokens the grammar can't use are an error."""
    with pytest.raises(ExpressionError):
        parse_expression("2(3)")
    with pytest.raises(ExpressionError):
        parse_expression("1+1)")


def test_expression_error_is_value_error():
    """Callers can catch ValueError."""
    assert issubclass(ExpressionError, ValueError)


def test_unicode_digits_are_not_numbers():
    """Superscript digits are not accepted as literals."""
    with pytest.raises(ExpressionError):
        parse_expression("2²")


# ---------------------------------------------------------------------------
# looks_like_expression()
# ---------------------------------------------------------------------------

def test_looks_like_expression():
    assert looks_like_expression("1+1")
    assert looks_like_expression("(5)")
    assert not looks_like_expression("12")
    assert not looks_like_expression("1e5+1")
    assert not looks_like_expression("+-")


def test_evaluate_label_follows_displayed_result():
    """A result shown as an integer always gets its spelled-out label."""
    result = evaluate("0.1*3*10")
    assert result.result == "3"
    assert result.result_label == "Three"
