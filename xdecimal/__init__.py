"""Exact arbitrary-precision decimal arithmetic.

This package provides:
- Decimal: immutable base-10 number, integer * 10**exponent
- DecimalContext: division digit ceiling, passed explicitly
- RoundingMode: ties-to-even, ties-away, toward zero, away from zero
"""

from xdecimal.context import DEFAULT_CONTEXT, MAX_DECIMAL_DIGITS, DecimalContext
from xdecimal.errors import DecimalError, InvalidDecimalString, InvalidPrecision
from xdecimal.number import Decimal, must_parse, new, parse
from xdecimal.rounding import RoundingMode

__version__ = "0.1.0"
__all__ = [
    "Decimal",
    "DecimalContext",
    "DEFAULT_CONTEXT",
    "MAX_DECIMAL_DIGITS",
    "RoundingMode",
    "DecimalError",
    "InvalidDecimalString",
    "InvalidPrecision",
    "new",
    "parse",
    "must_parse",
    "__version__",
]
