"""Arithmetic context for xdecimal.

Division of two decimals may not terminate (1/3). The context carries the
ceiling on how many digits a long division may append before the
expansion is truncated. It is passed explicitly to the operations that
need it; there is no global mutable state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

# Default ceiling for non-terminating division expansions
MAX_DECIMAL_DIGITS = 200

# Environment variable overriding the ceiling in DecimalContext.from_env()
MAX_DECIMAL_DIGITS_ENV = "XDECIMAL_MAX_DECIMAL_DIGITS"


@dataclass(frozen=True)
class DecimalContext:
    """Settings consulted by decimal division.

    Attributes:
        max_decimal_digits: Maximum number of digits a long division may
            append after the integer quotient. Expansions that have not
            terminated by then are truncated, not rejected.
    """

    max_decimal_digits: int = MAX_DECIMAL_DIGITS

    def __post_init__(self) -> None:
        if not isinstance(self.max_decimal_digits, int) or isinstance(self.max_decimal_digits, bool):
            raise TypeError(
                f"max_decimal_digits must be int, got {type(self.max_decimal_digits).__name__}"
            )
        if self.max_decimal_digits < 0:
            raise ValueError(f"max_decimal_digits cannot be negative: {self.max_decimal_digits}")

    @classmethod
    def from_env(cls) -> DecimalContext:
        """Build a context from environment variables.

        Reads XDECIMAL_MAX_DECIMAL_DIGITS, falling back to the default
        ceiling when it is unset.

        Raises:
            ValueError: If the variable is not a non-negative integer
        """
        raw = os.environ.get(MAX_DECIMAL_DIGITS_ENV)
        if raw is None:
            return cls()
        try:
            digits = int(raw)
        except ValueError as err:
            raise ValueError(f"{MAX_DECIMAL_DIGITS_ENV} must be an integer: '{raw}'") from err
        logger.debug("decimal_context_from_env", max_decimal_digits=digits)
        return cls(max_decimal_digits=digits)


# Default context instance
DEFAULT_CONTEXT = DecimalContext()
