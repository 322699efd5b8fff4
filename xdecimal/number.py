"""Arbitrary-precision decimal value type.

A Decimal is the exact value integer * 10**exponent, where integer (the
significand) is an unbounded Python int. The representation is not kept
in lowest terms: Decimal(150, -2) and Decimal(15, -1) are distinct
representations of the same value and compare equal.

Decimals are immutable. Arithmetic and rounding return new values, and
aligning two operands to a common exponent never touches either operand.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Callable
from fractions import Fraction

import numpy as np
import structlog

from xdecimal.context import DEFAULT_CONTEXT, DecimalContext
from xdecimal.errors import InvalidDecimalString
from xdecimal.parsing import format_parts, parse_parts
from xdecimal.rounding import (
    RoundingMode,
    check_precision,
    needs_rounding,
    round_away_from_zero,
    round_to_nearest_away,
    round_to_nearest_even,
    round_to_zero,
    rounding_function,
)

__all__ = [
    "Decimal",
    "new",
    "parse",
    "must_parse",
]

logger = structlog.get_logger()

# Numeric hash parameters, so that equal ints, Fractions and Decimals hash alike
_HASH_MODULUS = sys.hash_info.modulus
_HASH_10_INVERSE = pow(10, _HASH_MODULUS - 2, _HASH_MODULUS)


class Decimal:
    """Exact base-10 number: integer * 10**exponent.

    Construct from parts, or with parse(), from_float() or from_int():

        >>> Decimal.parse("0.1") + Decimal.parse("0.2") == Decimal.parse("0.3")
        True

    Attributes:
        integer: The significand (read-only)
        exponent: The power-of-ten scale (read-only)
    """

    __slots__ = ("_integer", "_exponent")
    _integer: int
    _exponent: int

    def __init__(self, integer: int = 0, exponent: int = 0) -> None:
        """Create a Decimal from its significand and exponent.

        Decimal() is zero.

        Raises:
            TypeError: If integer or exponent is not an int
        """
        if not isinstance(integer, int):
            raise TypeError(f"Decimal integer must be int, got {type(integer).__name__}")
        if not isinstance(exponent, int):
            raise TypeError(f"Decimal exponent must be int, got {type(exponent).__name__}")
        self._integer = int(integer)
        self._exponent = int(exponent)

    # --- Construction ---

    @classmethod
    def from_int(cls, value: int) -> Decimal:
        """Create from an integer (exponent 0)."""
        return cls(value, 0)

    @classmethod
    def from_float(cls, value: float) -> Decimal:
        """Create from a float via its shortest round-tripping text.

        Decimal.from_float(0.1) is exactly 0.1, not the binary value
        0.1000000000000000055511151231257827...

        Raises:
            InvalidDecimalString: If value is NaN or infinite
        """
        return cls.parse(repr(float(value)))

    @classmethod
    def try_parse(cls, text: str) -> Decimal | None:
        """Parse decimal text, returning None if it is malformed.

        Raises:
            TypeError: If text is not a str
        """
        if not isinstance(text, str):
            raise TypeError(f"decimal text must be str, got {type(text).__name__}")
        parts = parse_parts(text)
        if parts is None:
            return None
        return cls(*parts)

    @classmethod
    def parse(cls, text: str) -> Decimal:
        """Parse decimal text.

        Accepts [sign]digits[.digits][(e|E)[sign]digits], e.g. "123",
        "-0.0500", "1.5e10", "+2E-3".

        Raises:
            InvalidDecimalString: If text does not match the grammar
        """
        result = cls.try_parse(text)
        if result is None:
            raise InvalidDecimalString(text)
        return result

    @classmethod
    def zero(cls) -> Decimal:
        """Create a Decimal with value 0."""
        return cls()

    def copy(self) -> Decimal:
        """Return an independent Decimal with the same representation."""
        return Decimal(self._integer, self._exponent)

    # --- Representation ---

    @property
    def integer(self) -> int:
        """The significand."""
        return self._integer

    @property
    def exponent(self) -> int:
        """The power-of-ten scale."""
        return self._exponent

    def sign(self) -> int:
        """Return -1, 0 or +1. Zero is 0 whatever the exponent."""
        return (self._integer > 0) - (self._integer < 0)

    def is_zero(self) -> bool:
        return self._integer == 0

    def _aligned(self, other: Decimal) -> tuple[int, int, int]:
        """Rescale both significands to the smaller exponent.

        Returns:
            (self significand, other significand, shared exponent)
        """
        a, b = self._integer, other._integer
        diff = self._exponent - other._exponent
        if diff > 0:
            return a * 10**diff, b, other._exponent
        if diff < 0:
            return a, b * 10**-diff, self._exponent
        return a, b, self._exponent

    # --- Comparison ---

    def cmp(self, other: Decimal | int) -> int:
        """Compare values: -1 if self < other, 0 if equal, +1 if greater.

        -0 == 0, and "1.50" == "1.5".
        """
        a, b, _ = self._aligned(_coerce(other))
        return (a > b) - (a < b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.cmp(other) == 0

    def __lt__(self, other: Decimal | int) -> bool:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.cmp(other) < 0

    def __le__(self, other: Decimal | int) -> bool:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.cmp(other) <= 0

    def __gt__(self, other: Decimal | int) -> bool:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.cmp(other) > 0

    def __ge__(self, other: Decimal | int) -> bool:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.cmp(other) >= 0

    def __hash__(self) -> int:
        # Same scheme as int/Fraction hashing: value modulo the hash prime
        if self._exponent >= 0:
            scale = pow(10, self._exponent, _HASH_MODULUS)
        else:
            scale = pow(_HASH_10_INVERSE, -self._exponent, _HASH_MODULUS)
        result = abs(self._integer) * scale % _HASH_MODULUS
        if self._integer < 0:
            result = -result
        return -2 if result == -1 else result

    # --- Arithmetic ---

    def add(self, other: Decimal | int) -> Decimal:
        """Return self + other at the smaller of the two exponents."""
        a, b, exponent = self._aligned(_coerce(other))
        return Decimal(a + b, exponent)

    def sub(self, other: Decimal | int) -> Decimal:
        """Return self - other at the smaller of the two exponents."""
        a, b, exponent = self._aligned(_coerce(other))
        return Decimal(a - b, exponent)

    def mul(self, other: Decimal | int) -> Decimal:
        """Return self * other.

        A zero operand gives zero with exponent 0, so exponents of zero
        products do not accumulate.
        """
        other = _coerce(other)
        if self._integer == 0 or other._integer == 0:
            return Decimal()
        return Decimal(self._integer * other._integer, self._exponent + other._exponent)

    def quo(self, other: Decimal | int, context: DecimalContext | None = None) -> Decimal:
        """Return self / other.

        Division by zero is defined as zero (exponent 0), not an error.
        Exact quotients are returned exactly. Otherwise long division
        appends digits until the remainder vanishes or the quotient has
        context.max_decimal_digits digits after the decimal point, and the
        expansion is truncated there.

        Args:
            other: The divisor
            context: Division settings (default: DEFAULT_CONTEXT)
        """
        other = _coerce(other)
        if context is None:
            context = DEFAULT_CONTEXT
        if other._integer == 0:
            return Decimal()

        exponent = self._exponent - other._exponent
        quotient, remainder = divmod(self._integer, other._integer)
        if remainder == 0:
            return Decimal(quotient, exponent)

        negative = (self._integer < 0) != (other._integer < 0)
        divisor = abs(other._integer)
        quotient, remainder = divmod(abs(self._integer), divisor)
        digits = [str(quotient)]
        appended = 0
        while remainder and appended - exponent < context.max_decimal_digits:
            digit, remainder = divmod(remainder * 10, divisor)
            digits.append(str(digit))
            appended += 1

        if remainder:
            logger.debug(
                "division_expansion_truncated",
                dividend=str(self),
                divisor=str(other),
                max_decimal_digits=context.max_decimal_digits,
            )

        sign = "-" if negative else ""
        return Decimal.parse(f"{sign}{''.join(digits)}e{exponent - appended}")

    def div(self, other: Decimal | int, context: DecimalContext | None = None) -> Decimal:
        """Same as quo()."""
        return self.quo(other, context)

    def abs(self) -> Decimal:
        """Return |self|."""
        return Decimal(abs(self._integer), self._exponent)

    def neg(self) -> Decimal:
        """Return -self."""
        return Decimal(-self._integer, self._exponent)

    def __add__(self, other: Decimal | int) -> Decimal:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: int) -> Decimal:
        if not isinstance(other, int):
            return NotImplemented
        return Decimal.from_int(other).add(self)

    def __sub__(self, other: Decimal | int) -> Decimal:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other: int) -> Decimal:
        if not isinstance(other, int):
            return NotImplemented
        return Decimal.from_int(other).sub(self)

    def __mul__(self, other: Decimal | int) -> Decimal:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other: int) -> Decimal:
        if not isinstance(other, int):
            return NotImplemented
        return Decimal.from_int(other).mul(self)

    def __truediv__(self, other: Decimal | int) -> Decimal:
        if not isinstance(other, (Decimal, int)):
            return NotImplemented
        return self.quo(other)

    def __rtruediv__(self, other: int) -> Decimal:
        if not isinstance(other, int):
            return NotImplemented
        return Decimal.from_int(other).quo(self)

    def __neg__(self) -> Decimal:
        return self.neg()

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    # --- Rounding ---

    def _rounded(self, precision: int, algorithm: Callable[[int, int, int], int]) -> Decimal:
        check_precision(precision)
        if not needs_rounding(self._integer, self._exponent, precision):
            return self
        return Decimal(algorithm(self._integer, self._exponent, precision), -precision)

    def round(self, precision: int, mode: RoundingMode | str = RoundingMode.NEAREST_EVEN) -> Decimal:
        """Round to `precision` digits after the decimal point.

        Values that already fit (zero, non-negative exponent, or at most
        `precision` fractional digits) are returned unchanged. Otherwise
        the result has exponent -precision.

        Args:
            precision: Digits to keep after the decimal point (>= 0)
            mode: Rounding policy (default: ties to even)

        Raises:
            InvalidPrecision: If precision is negative
        """
        return self._rounded(precision, rounding_function(mode))

    def round_to_nearest_even(self, precision: int) -> Decimal:
        """Round to nearest, ties to even: 2.5 -> 2, 3.5 -> 4."""
        return self._rounded(precision, round_to_nearest_even)

    def round_to_nearest_away(self, precision: int) -> Decimal:
        """Round to nearest, ties away from zero: 2.5 -> 3, -2.5 -> -3."""
        return self._rounded(precision, round_to_nearest_away)

    def round_to_zero(self, precision: int) -> Decimal:
        """Truncate: 2.567 -> 2.56 at precision 2."""
        return self._rounded(precision, round_to_zero)

    def truncate(self, precision: int) -> Decimal:
        """Same as round_to_zero()."""
        return self.round_to_zero(precision)

    def round_down(self, precision: int) -> Decimal:
        """Same as round_to_zero()."""
        return self.round_to_zero(precision)

    def round_away_from_zero(self, precision: int) -> Decimal:
        """Round up in magnitude if anything is discarded: 2.561 -> 2.57."""
        return self._rounded(precision, round_away_from_zero)

    def round_up(self, precision: int) -> Decimal:
        """Same as round_away_from_zero()."""
        return self.round_away_from_zero(precision)

    def __round__(self, ndigits: int | None = None) -> Decimal | int:
        """round(d, n) rounds ties to even; round(d) returns an int."""
        if ndigits is None:
            return int(self.round_to_nearest_even(0))
        return self.round_to_nearest_even(ndigits)

    # --- Conversion ---

    def to_int(self) -> tuple[int, bool]:
        """Convert to int, truncating toward zero.

        Returns:
            (value, exact). exact is False whenever the exponent is
            negative, even if the discarded digits are all zero.
        """
        if self._exponent >= 0:
            return self._integer * 10**self._exponent, True
        scale = 10**-self._exponent
        value = abs(self._integer) // scale
        return (-value if self._integer < 0 else value), False

    def to_fraction(self) -> Fraction:
        """Exact rational value."""
        if self._exponent >= 0:
            return Fraction(self._integer * 10**self._exponent)
        return Fraction(self._integer, 10**-self._exponent)

    def to_float64(self) -> tuple[float, bool]:
        """Nearest binary64 float and whether it is exactly equal."""
        rational = self.to_fraction()
        try:
            value = float(rational)
        except OverflowError:
            return (-math.inf if rational < 0 else math.inf), False
        return value, Fraction(value) == rational

    def to_float32(self) -> tuple[np.float32, bool]:
        """Nearest binary32 float and whether it is exactly equal."""
        value, exact = _to_binary_float(self.to_fraction(), precision=24, emin=-126, emax=127)
        return np.float32(value), exact

    def __int__(self) -> int:
        return self.to_int()[0]

    def __float__(self) -> float:
        return self.to_float64()[0]

    def __bool__(self) -> bool:
        return self._integer != 0

    def __str__(self) -> str:
        return format_parts(self._integer, self._exponent)

    def __repr__(self) -> str:
        return f"Decimal('{self}')"


def _coerce(value: Decimal | int) -> Decimal:
    """Promote an int operand to a Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value, 0)
    raise TypeError(f"Decimal operand must be Decimal or int, got {type(value).__name__}")


def _to_binary_float(value: Fraction, precision: int, emin: int, emax: int) -> tuple[float, bool]:
    """Round a rational to the nearest binary float, ties to even.

    Args:
        value: The exact value
        precision: Significand bits of the format, implicit bit included
        emin: Smallest normal binary exponent
        emax: Largest binary exponent

    Returns:
        (nearest float, exact). Values beyond the format's range round to
        +/-inf and are inexact.
    """
    if value == 0:
        return 0.0, True
    sign = -1.0 if value < 0 else 1.0
    n, d = abs(value.numerator), value.denominator

    # 2**e <= n/d < 2**(e+1)
    e = n.bit_length() - d.bit_length()
    if (n << max(0, -e)) < (d << max(0, e)):
        e -= 1
    if e > emax:
        return sign * math.inf, False

    # Subnormals share the fixed quantum 2**(emin - precision + 1)
    shift = min(precision - 1 - e, precision - 1 - emin)
    if shift >= 0:
        q, r = divmod(n << shift, d)
        half = d
    else:
        q, r = divmod(n, d << -shift)
        half = d << -shift
    if 2 * r > half or (2 * r == half and q & 1):
        q += 1
    if q >= 1 << (emax + 1 + shift):
        return sign * math.inf, False
    return sign * math.ldexp(q, -shift), r == 0


def new(value: float) -> Decimal:
    """Create a Decimal from a float. See Decimal.from_float()."""
    return Decimal.from_float(value)


def parse(text: str) -> Decimal:
    """Parse decimal text.

    Raises:
        InvalidDecimalString: If text does not match the grammar
    """
    return Decimal.parse(text)


def must_parse(text: str) -> Decimal:
    """Parse decimal text that is known to be well formed.

    For literals in source code, where malformed text is a programming
    error rather than bad input.

    Raises:
        RuntimeError: If text does not match the grammar
    """
    try:
        return Decimal.parse(text)
    except InvalidDecimalString as err:
        raise RuntimeError(str(err)) from err
