"""Exceptions raised by xdecimal."""

from __future__ import annotations


class DecimalError(ArithmeticError):
    """Base class for xdecimal errors."""

    pass


class InvalidDecimalString(DecimalError, ValueError):
    """Text does not match the decimal grammar."""

    def __init__(self, text: str) -> None:
        super().__init__(f"decimal string {text!r} is invalid")
        self.text = text


class InvalidPrecision(DecimalError, ValueError):
    """Rounding precision is negative."""

    pass
