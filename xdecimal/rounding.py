"""Rounding algorithms for scaled decimals.

Each function takes the representation of a value (significand, exponent)
and a precision, the number of digits to keep after the decimal point,
and returns the new significand. The rounded value always has exponent
-precision, except when no rounding is needed (see needs_rounding), in
which case the representation is left as it was.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from xdecimal.errors import InvalidPrecision

__all__ = [
    "RoundingMode",
    "needs_rounding",
    "check_precision",
    "round_to_nearest_even",
    "round_to_nearest_away",
    "round_to_zero",
    "round_away_from_zero",
    "rounding_function",
]

_ODD_DIGITS = frozenset("13579")


class RoundingMode(str, Enum):
    """Supported rounding policies."""

    # IEEE 754-2008 round to nearest, ties to even (banker's rounding)
    NEAREST_EVEN = "nearest_even"
    # IEEE 754-2008 round to nearest, ties away from zero
    NEAREST_AWAY = "nearest_away"
    # IEEE 754-2008 round toward zero (truncate)
    TO_ZERO = "to_zero"
    # Round away from zero (not an IEEE 754 mode)
    AWAY_FROM_ZERO = "away_from_zero"


def check_precision(precision: int) -> int:
    """Validate a rounding precision.

    Raises:
        InvalidPrecision: If precision is negative
        TypeError: If precision is not an int
    """
    if not isinstance(precision, int) or isinstance(precision, bool):
        raise TypeError(f"precision must be int, got {type(precision).__name__}")
    if precision < 0:
        raise InvalidPrecision(f"precision cannot be negative: {precision}")
    return precision


def needs_rounding(significand: int, exponent: int, precision: int) -> bool:
    """True if the value has more than `precision` fractional digits."""
    return significand != 0 and exponent < 0 and -exponent > precision


def _sign(significand: int) -> int:
    return -1 if significand < 0 else 1


def round_to_nearest_even(significand: int, exponent: int, precision: int) -> int:
    """Round half to even, by inspecting the discarded digits.

    6-9 rounds up. 5 followed by any nonzero digit rounds up. An exact 5
    rounds up only if the last kept digit is odd.
    """
    scale = -exponent
    # At least one integer digit, so the kept part is never empty
    digits = str(abs(significand)).zfill(scale + 1)
    whole = digits[: len(digits) - scale]
    fraction = digits[len(digits) - scale :]
    kept = whole + fraction[:precision]
    discarded = fraction[precision:]

    first = discarded[0]
    if first in "6789":
        round_up = True
    elif first == "5":
        round_up = discarded[1:].strip("0") != "" or kept[-1] in _ODD_DIGITS
    else:
        round_up = False

    return _sign(significand) * (int(kept) + int(round_up))


def round_to_nearest_away(significand: int, exponent: int, precision: int) -> int:
    """Round half away from zero.

    Truncates to one extra digit, adds 5 and drops that digit again.
    """
    extra = abs(significand) // 10 ** (-exponent - precision - 1)
    return _sign(significand) * ((extra + 5) // 10)


def round_to_zero(significand: int, exponent: int, precision: int) -> int:
    """Drop the discarded digits."""
    return _sign(significand) * (abs(significand) // 10 ** (-exponent - precision))


def round_away_from_zero(significand: int, exponent: int, precision: int) -> int:
    """Truncate, then add one unit if any discarded digit was nonzero."""
    kept, rest = divmod(abs(significand), 10 ** (-exponent - precision))
    if rest:
        kept += 1
    return _sign(significand) * kept


_ROUNDING_FUNCTIONS: dict[RoundingMode, Callable[[int, int, int], int]] = {
    RoundingMode.NEAREST_EVEN: round_to_nearest_even,
    RoundingMode.NEAREST_AWAY: round_to_nearest_away,
    RoundingMode.TO_ZERO: round_to_zero,
    RoundingMode.AWAY_FROM_ZERO: round_away_from_zero,
}


def rounding_function(mode: RoundingMode | str) -> Callable[[int, int, int], int]:
    """Look up the algorithm for a rounding mode.

    Raises:
        ValueError: If mode is not a known RoundingMode
    """
    return _ROUNDING_FUNCTIONS[RoundingMode(mode)]
