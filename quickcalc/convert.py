"""
Unit and temperature conversion for parsed queries.
"""

from __future__ import annotations

import logging
import math

from quickcalc.aliases import ALIAS_INDEX, AliasIndex
from quickcalc.formatting import format_number
from quickcalc.models import CalcResult, ParsedQuery
from quickcalc.units import convert_linear, convert_temperature

logger = logging.getLogger(__name__)


def convert_units(parsed: ParsedQuery, index: AliasIndex = ALIAS_INDEX) -> CalcResult | None:
    """
    Convert between two units of one category, or between two temperature
    scales. Anything else (unknown phrase, mixed categories, one temperature
    side and one non-temperature side) gives None.
    """
    from_temp = index.find_temperature(parsed.from_phrase)
    to_temp = index.find_temperature(parsed.to_phrase)

    if from_temp and to_temp:
        result = convert_temperature(parsed.value, from_temp, to_temp)
        if not math.isfinite(result):
            return None
        return CalcResult(
            input=f"{format_number(parsed.value)} {from_temp.symbol}",
            input_label=from_temp.label,
            result=f"{format_number(result)} {to_temp.symbol}",
            result_label=to_temp.label,
        )

    # Temperature and linear conversion never mix
    if from_temp or to_temp:
        return None

    src = index.find_unit(parsed.from_phrase)
    dst = index.find_unit(parsed.to_phrase)
    if not src or not dst:
        return None
    if src.category.category is not dst.category.category:
        logger.debug(
            "Category mismatch: %s (%s) vs %s (%s)",
            parsed.from_phrase, src.category.name, parsed.to_phrase, dst.category.name,
        )
        return None

    result = convert_linear(parsed.value, src.unit, dst.unit)
    if not math.isfinite(result):
        return None

    return CalcResult(
        input=f"{format_number(parsed.value)} {src.unit.symbol}",
        input_label=src.unit.label,
        result=f"{format_number(result)} {dst.unit.symbol}",
        result_label=dst.unit.label,
    )
