"""
Number formatting for results.

One fixed convention (en-US): comma thousands separators, "." decimal point,
trailing zeros trimmed. Precision is tiered by magnitude so small values keep
their significant digits and large ones don't drown in decimals.
"""

from __future__ import annotations

import math

from quickcalc.monetary import MonetaryAsset

WORDS_LIMIT = 999_999_999_999

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]
_SCALES = ["", " Thousand", " Million", " Billion"]


def _is_integral(n: float) -> bool:
    """True for integers and for floats within rounding noise of one."""
    return math.isfinite(n) and math.isclose(n, round(n), rel_tol=1e-12, abs_tol=0.0)


def _grouped(n: float, max_decimals: int) -> str:
    """Thousands-grouped with at most max_decimals places: 1234.5 -> "1,234.5"."""
    text = f"{n:,.{max_decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _to_exponential(n: float, digits: int) -> str:
    """Scientific notation without exponent padding: 1.2346e-7, 1.0000e-20."""
    mantissa, exponent = f"{n:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_number(n: float) -> str:
    if _is_integral(n) and abs(n) < 1e15:
        return f"{round(n):,}"

    magnitude = abs(n)
    if magnitude >= 1000:
        return _grouped(n, 2)
    if magnitude >= 1:
        return _grouped(n, 6)
    if magnitude >= 0.001:
        return _grouped(n, 8)
    return _to_exponential(n, 4)


def format_monetary_amount(amount: float, asset: MonetaryAsset) -> str:
    """
    Fiat: 2 decimals from 1 up, 4 from 0.01, 8 below.
    Crypto: 8 decimals from 1 up, 10 below.
    """
    magnitude = abs(amount)
    if asset.is_crypto:
        decimals = 8 if magnitude >= 1 else 10
    elif magnitude >= 1:
        decimals = 2
    elif magnitude >= 0.01:
        decimals = 4
    else:
        decimals = 8
    return _grouped(amount, decimals)


def _chunk_to_words(num: int) -> str:
    if num == 0:
        return ""
    if num < 20:
        return _ONES[num]
    if num < 100:
        tens, ones = divmod(num, 10)
        return _TENS[tens] + (" " + _ONES[ones] if ones else "")
    hundreds, rest = divmod(num, 100)
    return _ONES[hundreds] + " Hundred" + (" " + _chunk_to_words(rest) if rest else "")


def number_to_words(n: float) -> str:
    """
    Spell out an integer in English: 1024 -> "One Thousand Twenty Four".
    Floats within rounding noise of an integer are spelled as that integer.
    Empty string for other fractions or anything beyond the billions.
    """
    if isinstance(n, float) and not _is_integral(n):
        return ""
    value = round(n)
    if abs(value) > WORDS_LIMIT:
        return ""
    if value == 0:
        return "Zero"

    parts: list[str] = []
    remaining = abs(value)
    scale = 0
    while remaining > 0:
        remaining, chunk = divmod(remaining, 1000)
        if chunk:
            parts.insert(0, _chunk_to_words(chunk) + _SCALES[scale])
        scale += 1

    return ("Negative " if value < 0 else "") + " ".join(parts)
