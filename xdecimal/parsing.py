"""Textual form of decimals.

Input grammar:  [sign]digits[.digits][(e|E)[sign]digits]
Output grammar: [-]digits[.digits], no exponent marker, no trailing
fractional zeros, and exactly "0" for zero.
"""

from __future__ import annotations

import re

__all__ = [
    "DECIMAL_PATTERN",
    "parse_parts",
    "format_parts",
]

# Groups: integer part with sign, fraction digits, exponent with sign.
# ASCII digits only; fullmatch() so a trailing newline is rejected.
DECIMAL_PATTERN = re.compile(r"([-+]?[0-9]+)(?:\.([0-9]+))?(?:[eE]([-+]?[0-9]+))?", re.ASCII)


def parse_parts(text: str) -> tuple[int, int] | None:
    """Split decimal text into (significand, exponent).

    Trailing zeros of the fraction are dropped before the fraction is
    folded into the significand, so "1.50" and "1.5" parse identically.
    Trailing zeros of the integer part are kept ("100" is (100, 0)).

    Args:
        text: Decimal text in the input grammar

    Returns:
        (significand, exponent) such that value = significand * 10**exponent,
        or None if text does not match the grammar.
    """
    match = DECIMAL_PATTERN.fullmatch(text)
    if match is None:
        return None
    integer_part, fraction, exponent_part = match.groups()
    fraction = (fraction or "").rstrip("0")
    significand = int(integer_part + fraction)
    exponent = -len(fraction)
    if exponent_part is not None:
        exponent += int(exponent_part)
    return significand, exponent


def format_parts(significand: int, exponent: int) -> str:
    """Render (significand, exponent) in canonical form.

    Examples:
        (0, -3)    -> "0"
        (15, 2)    -> "1500"
        (-1500, -3) -> "-1.5"
        (5, -3)    -> "0.005"
    """
    if significand == 0:
        return "0"
    sign = "-" if significand < 0 else ""
    digits = str(abs(significand))
    if exponent >= 0:
        return sign + digits + "0" * exponent

    point = len(digits) + exponent
    if point <= 0:
        return sign + "0." + "0" * -point + digits.rstrip("0")
    whole, fraction = digits[:point], digits[point:].rstrip("0")
    if fraction:
        return f"{sign}{whole}.{fraction}"
    return sign + whole
