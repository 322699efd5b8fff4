"""Test helpers module for shared test utilities.

- constants: Decimal literals reused across test modules
- factories: Shorthand constructors for test tables
"""

from tests.helpers.constants import NON_TERMINATING, ONE_THIRD_TEXT
from tests.helpers.factories import D, fraction_digits, make_decimal

__all__ = [
    # Constants
    "ONE_THIRD_TEXT",
    "NON_TERMINATING",
    # Factories
    "D",
    "make_decimal",
    "fraction_digits",
]
