"""
Data models shared across the calculator engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ParsedQuery:
    """A `VALUE from to target` query split into its parts."""
    raw_value: str
    value: float
    from_phrase: str
    to_phrase: str


@dataclass(frozen=True)
class CalcResult:
    """
    The only thing the engine hands back to a caller.
    Strings are pre-formatted so the UI never reformats numbers.
    """
    input: str
    input_label: str
    result: str
    result_label: str

    def to_dict(self) -> dict:
        return asdict(self)
