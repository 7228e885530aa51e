"""
quickcalc — search-box calculator engine.

Turns a typed query into a unit conversion, an arithmetic result or a live
currency / crypto conversion, or nothing at all.
"""
from quickcalc.models import CalcResult, ParsedQuery
from quickcalc.service import ConversionService, calculate

__version__ = "0.3.0"

__all__ = [
    "CalcResult",
    "ParsedQuery",
    "ConversionService",
    "calculate",
    "__version__",
]
