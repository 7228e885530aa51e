"""
Query parser — pulls (value, from, to) out of free text.

Two surface forms:
  "5 km to miles", "1,200.5 USD in EUR", "3e8 m/s as km/h", "3 m^2 to cm²"
  "$50 to EUR", "€1,000 = gbp"

The phrases are passed downstream untouched; each resolver normalizes them
its own way.
"""

from __future__ import annotations

import logging
import math
import re

from quickcalc.models import ParsedQuery

logger = logging.getLogger(__name__)

VALUE_PATTERN = r"[+-]?(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d*\.\d+|\d+)(?:e[+-]?\d+)?"
PREFIX_SYMBOLS = "$€£¥₹₿₺₱₩"

_PHRASE = rf"[A-Za-z0-9_°µμ²³^/\s{re.escape(PREFIX_SYMBOLS)}.,-]"
_SEPARATOR = r"\s+(?:to|in|as|=)\s+"

CONVERSION_QUERY_RE = re.compile(
    rf"^({VALUE_PATTERN})\s*({_PHRASE}+?){_SEPARATOR}({_PHRASE}+)$",
    re.IGNORECASE,
)
PREFIX_SYMBOL_QUERY_RE = re.compile(
    rf"^([{re.escape(PREFIX_SYMBOLS)}])\s*({VALUE_PATTERN}){_SEPARATOR}({_PHRASE}+)$",
    re.IGNORECASE,
)
_TRAILING_QUESTION = re.compile(r"\?+$")


def _to_float(raw: str) -> float | None:
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_query(query: str) -> ParsedQuery | None:
    """Return the parsed query, or None when neither form matches."""
    if not query:
        return None
    trimmed = _TRAILING_QUESTION.sub("", query.strip()).strip()
    if not trimmed:
        return None

    match = CONVERSION_QUERY_RE.match(trimmed)
    if match:
        raw_value, from_phrase, to_phrase = match.group(1), match.group(2), match.group(3)
    else:
        match = PREFIX_SYMBOL_QUERY_RE.match(trimmed)
        if not match:
            return None
        from_phrase, raw_value, to_phrase = match.group(1), match.group(2), match.group(3)

    value = _to_float(raw_value)
    if value is None:
        logger.debug("Rejected non-finite value %r in %r", raw_value, query)
        return None

    return ParsedQuery(
        raw_value=raw_value,
        value=value,
        from_phrase=from_phrase.strip(),
        to_phrase=to_phrase.strip(),
    )
