"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import D
from xdecimal import Decimal, DecimalContext


@pytest.fixture
def short_context() -> DecimalContext:
    """A context that truncates division expansions after 10 digits."""
    return DecimalContext(max_decimal_digits=10)


@pytest.fixture
def operands() -> list[Decimal]:
    """Mixed-scale operands for algebraic property tests."""
    return [
        D("0"),
        D("-0"),
        D("1"),
        D("-1.5"),
        D("0.1"),
        D("0.2"),
        D("123.4500"),
        D("1e3"),
        D("-2.5E-4"),
        D("98765432109876543210.0123456789"),
    ]
