"""
Alias normalization and the alias index.

Everything a user might type for a unit ("km", "Kilometres", "sq ft",
"m^2", "µs", "degrees Celsius", "US dollars") is normalized to a canonical
key and looked up in maps built once at import time.

Index invariant: when two aliases normalize to the same key, the first one
registered wins. Later duplicates are skipped, never overwritten.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from quickcalc.monetary import (
    CRYPTO_BY_CODE,
    CRYPTO_CURRENCIES,
    FIAT_BY_CODE,
    FIAT_CURRENCIES,
    MonetaryAsset,
)
from quickcalc.units import (
    TEMPERATURE_ALIASES,
    UNIT_CATEGORIES,
    TemperatureKey,
    UnitCategory,
    UnitDef,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

# (pattern, replacement), applied in order
_UNIT_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"[μµ]"), "u"),
    (re.compile(r"²"), "2"),
    (re.compile(r"³"), "3"),
    (re.compile(r"\^2\b"), "2"),
    (re.compile(r"\^3\b"), "3"),
    (re.compile(r"°"), ""),
    (re.compile(r"\bdegrees?\b"), ""),
    (re.compile(r"\bsquare\b"), "sq"),
    (re.compile(r"\bcubic\b"), "cu"),
    (re.compile(r"\bper\b"), "/"),
    (re.compile(r"\s*/[\s/]*"), "/"),
    (re.compile(r"[(),]"), " "),
    (re.compile(r"-"), " "),
    (re.compile(r"([a-z])\s+([23])\b"), r"\1\2"),
    (re.compile(r"\s+"), " "),
]

_MONETARY_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"[(),.\-]"), " "),
    (re.compile(r"\s+"), " "),
]

_DEG_WORD = re.compile(r"\bdeg\b")
_WS = re.compile(r"\s+")
_NON_LETTERS = re.compile(r"[^A-Z]")


def _apply(rules, value: str) -> str:
    for pattern, repl in rules:
        value = pattern.sub(repl, value)
    return value.strip()


def normalize_unit_alias(value: str) -> str:
    """Canonical lookup key for a unit phrase: "Square Metres" -> "sq metres"."""
    return _apply(_UNIT_RULES, value.strip().lower())


def normalize_temperature_alias(value: str) -> str:
    """Unit normalization plus dropping the word "deg"."""
    key = _DEG_WORD.sub("", normalize_unit_alias(value))
    return _WS.sub(" ", key).strip()


def normalize_monetary_alias(value: str) -> str:
    """Lighter than unit normalization: currency names don't carry exponents."""
    return _apply(_MONETARY_RULES, value.strip().lower())


# ---------------------------------------------------------------------------
# Index entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnitEntry:
    category: UnitCategory
    unit: UnitDef


@dataclass(frozen=True)
class TemperatureEntry:
    key: TemperatureKey


@dataclass(frozen=True)
class MonetaryEntry:
    asset: MonetaryAsset


AliasEntry = Union[UnitEntry, TemperatureEntry, MonetaryEntry]


class AliasIndex:
    """
    Normalized alias -> resolved entity, one map per normalization scheme.
    Fiat and crypto share the monetary map (fiat registered first).
    """

    def __init__(self):
        self.units: dict[str, UnitEntry] = {}
        self.temperatures: dict[str, TemperatureEntry] = {}
        self.monetary: dict[str, MonetaryEntry] = {}

    @staticmethod
    def _insert(table: dict, key: str, entry) -> bool:
        if not key or key in table:
            return False
        table[key] = entry
        return True

    @classmethod
    def build(cls) -> "AliasIndex":
        index = cls()
        skipped = 0

        for category in UNIT_CATEGORIES:
            for unit in category.units:
                entry = UnitEntry(category, unit)
                for alias in unit.aliases:
                    if not cls._insert(index.units, normalize_unit_alias(alias), entry):
                        skipped += 1

        for alias, key in TEMPERATURE_ALIASES:
            if not cls._insert(index.temperatures, normalize_temperature_alias(alias), TemperatureEntry(key)):
                skipped += 1

        for asset in FIAT_CURRENCIES + CRYPTO_CURRENCIES:
            entry = MonetaryEntry(asset)
            for alias in (asset.code.lower(), *asset.aliases):
                if not cls._insert(index.monetary, normalize_monetary_alias(alias), entry):
                    skipped += 1

        logger.debug(
            "Alias index built: %d unit, %d temperature, %d monetary keys (%d duplicates skipped)",
            len(index.units), len(index.temperatures), len(index.monetary), skipped,
        )
        return index

    # --- lookups -----------------------------------------------------------

    def find_unit(self, phrase: str) -> UnitEntry | None:
        return self.units.get(normalize_unit_alias(phrase))

    def find_temperature(self, phrase: str) -> TemperatureKey | None:
        entry = self.temperatures.get(normalize_temperature_alias(phrase))
        return entry.key if entry else None

    def find_monetary(self, phrase: str) -> MonetaryAsset | None:
        """
        Alias lookup first; failing that, treat a 3-5 letter phrase as an
        asset code ("eur.", "Btc" -> EUR, BTC).
        """
        normalized = normalize_monetary_alias(phrase)
        if not normalized:
            return None

        entry = self.monetary.get(normalized)
        if entry:
            return entry.asset

        code = _NON_LETTERS.sub("", phrase.strip().upper())
        if 3 <= len(code) <= 5:
            return FIAT_BY_CODE.get(code) or CRYPTO_BY_CODE.get(code)
        return None

    def resolve(self, phrase: str) -> list[AliasEntry]:
        """Every interpretation of a phrase, temperature first."""
        found: list[AliasEntry] = []
        temp = self.find_temperature(phrase)
        if temp:
            found.append(TemperatureEntry(temp))
        unit = self.find_unit(phrase)
        if unit:
            found.append(unit)
        asset = self.find_monetary(phrase)
        if asset:
            found.append(MonetaryEntry(asset))
        return found


ALIAS_INDEX = AliasIndex.build()
