"""
Arithmetic evaluator — recursive descent, no eval().

Grammar (left-to-right within each level):
    add_sub := mul_div (('+' | '-') mul_div)*
    mul_div := power   (('*' | '/' | '%') power)*
    power   := unary   (('^' | '**') unary)*
    unary   := ('-' | '+') unary | atom
    atom    := number | '(' add_sub ')'

Examples:
  "2+2*2"     -> 6
  "(2+2)*2"   -> 8
  "2^10"      -> 1024  (One Thousand Twenty Four)
  "10 % 3"    -> 1
"""

from __future__ import annotations

import logging
import math
import re

from quickcalc.formatting import format_number, number_to_words
from quickcalc.models import CalcResult

logger = logging.getLogger(__name__)

_HAS_DIGIT = re.compile(r"\d")
_HAS_LETTER = re.compile(r"[a-zA-Z]")
_HAS_OPERATOR = re.compile(r"[+\-*/%^()]")
_BARE_NUMBER = re.compile(r"^[+-]?\d+\.?\d*$")
_WHITESPACE = re.compile(r"\s+")


class ExpressionError(ValueError):
    """Input the grammar cannot consume."""


class _Parser:
    def __init__(self, text: str):
        self.text = _WHITESPACE.sub("", text)
        self.pos = 0

    def _peek(self, offset: int = 0) -> str:
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def parse(self) -> float:
        result = self._add_sub()
        if self.pos != len(self.text):
            raise ExpressionError(f"Unexpected {self._peek()!r} at position {self.pos}")
        return result

    def _add_sub(self) -> float:
        left = self._mul_div()
        while self._peek() in ("+", "-"):
            op = self._peek()
            self.pos += 1
            right = self._mul_div()
            left = left + right if op == "+" else left - right
        return left

    def _mul_div(self) -> float:
        left = self._power()
        while self._peek() in ("*", "/", "%"):
            op = self._peek()
            self.pos += 1
            right = self._power()
            if op == "*":
                left *= right
            elif op == "/":
                left /= right
            else:
                # sign follows the dividend, as in C
                left = math.fmod(left, right)
        return left

    def _power(self) -> float:
        base = self._unary()
        while self._peek() == "^" or (self._peek() == "*" and self._peek(1) == "*"):
            self.pos += 2 if self._peek() == "*" else 1
            exponent = self._unary()
            base = math.pow(base, exponent)
        return base

    def _unary(self) -> float:
        if self._peek() == "-":
            self.pos += 1
            return -self._unary()
        if self._peek() == "+":
            self.pos += 1
            return self._unary()
        return self._atom()

    def _atom(self) -> float:
        if self._peek() == "(":
            self.pos += 1
            result = self._add_sub()
            # tolerate a missing ")" at the end, the user may still be typing
            if self._peek() == ")":
                self.pos += 1
            return result

        start = self.pos
        while "0" <= self._peek() <= "9":
            self.pos += 1
        if self._peek() == ".":
            self.pos += 1
            while "0" <= self._peek() <= "9":
                self.pos += 1

        literal = self.text[start:self.pos]
        if not literal or literal == ".":
            raise ExpressionError(f"Unexpected {self._peek()!r} at position {start}")
        return float(literal)


def parse_expression(text: str) -> float:
    """Evaluate text, raising ExpressionError/ArithmeticError/ValueError on failure."""
    return _Parser(text).parse()


def looks_like_expression(query: str) -> bool:
    """
    Cheap gate before parsing: digits, no letters, at least one operator,
    and not a bare number (those are passed through, not calculated).
    """
    return (
        bool(_HAS_DIGIT.search(query))
        and not _HAS_LETTER.search(query)
        and bool(_HAS_OPERATOR.search(query))
        and not _BARE_NUMBER.match(query)
    )


def evaluate(query: str) -> CalcResult | None:
    trimmed = query.strip()
    if not looks_like_expression(trimmed):
        return None

    try:
        result = parse_expression(trimmed)
    except (ValueError, ArithmeticError, RecursionError) as e:
        # ExpressionError is a ValueError; math.pow/fmod domain errors too
        logger.debug("Expression %r rejected: %s", trimmed, e)
        return None

    if not math.isfinite(result):
        return None

    return CalcResult(
        input=trimmed,
        input_label="Expression",
        result=format_number(result),
        result_label=number_to_words(result),
    )
