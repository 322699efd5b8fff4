"""Tests for the rounding family."""

import decimal as std_decimal

import pytest

from tests.helpers import D, make_decimal
from xdecimal import Decimal, InvalidPrecision, RoundingMode
from xdecimal.rounding import needs_rounding, rounding_function

# Reference rounding modes from the standard library
STD_ROUNDING = {
    RoundingMode.NEAREST_EVEN: std_decimal.ROUND_HALF_EVEN,
    RoundingMode.NEAREST_AWAY: std_decimal.ROUND_HALF_UP,
    RoundingMode.TO_ZERO: std_decimal.ROUND_DOWN,
    RoundingMode.AWAY_FROM_ZERO: std_decimal.ROUND_UP,
}

SAMPLES = [
    "2.5",
    "3.5",
    "-2.5",
    "-3.5",
    "2.51",
    "2.4999",
    "1.25",
    "1.35",
    "0.05",
    "0.15",
    "-0.0051",
    "9.99",
    "-9.95",
    "2.567",
    "2.561",
    "0.001",
    "123456789.987654321",
    "-0.5",
    "0.00000000045",
    "1e-30",
]


class TestRoundToNearestEven:
    """Tests for ties-to-even rounding."""

    @pytest.mark.parametrize(
        "text,precision,expected",
        [
            ("2.5", 0, "2"),
            ("3.5", 0, "4"),
            ("-2.5", 0, "-2"),
            ("-3.5", 0, "-4"),
            ("2.51", 0, "3"),
            ("2.5000001", 0, "3"),
            ("2.4999", 0, "2"),
            ("2.6", 0, "3"),
            ("1.25", 1, "1.2"),
            ("1.35", 1, "1.4"),
            ("1.2500", 1, "1.2"),
            ("0.05", 1, "0"),
            ("0.15", 1, "0.2"),
            ("0.005", 2, "0"),
            ("-0.0051", 2, "-0.01"),
            ("9.99", 1, "10"),
            ("2.675", 2, "2.68"),
            ("2.665", 2, "2.66"),
        ],
    )
    def test_values(self, text, precision, expected):
        """Exact halves go to the even neighbour."""
        assert str(D(text).round_to_nearest_even(precision)) == expected

    def test_round_defaults_to_even(self):
        """round() without a mode is ties to even."""
        assert D("2.5").round(0) == 2
        assert D("3.5").round(0) == 4

    def test_builtin_round(self):
        """round(d, n) rounds ties to even; round(d) gives an int."""
        assert round(D("2.675"), 2) == D("2.68")
        result = round(D("2.5"))
        assert isinstance(result, int)
        assert result == 2
        assert round(D("-3.5")) == -4


class TestRoundToNearestAway:
    """Tests for ties-away-from-zero rounding."""

    @pytest.mark.parametrize(
        "text,precision,expected",
        [
            ("2.5", 0, "3"),
            ("-2.5", 0, "-3"),
            ("2.4", 0, "2"),
            ("2.45", 1, "2.5"),
            ("-2.449", 2, "-2.45"),
            ("0.5", 0, "1"),
            ("1.0049", 2, "1"),
            ("-0.05", 1, "-0.1"),
        ],
    )
    def test_values(self, text, precision, expected):
        """Exact halves move away from zero."""
        assert str(D(text).round_to_nearest_away(precision)) == expected


class TestRoundToZero:
    """Tests for truncation."""

    @pytest.mark.parametrize(
        "text,precision,expected",
        [
            ("2.567", 2, "2.56"),
            ("-2.567", 2, "-2.56"),
            ("0.999", 0, "0"),
            ("-0.999", 0, "0"),
            ("1.999", 2, "1.99"),
        ],
    )
    def test_values(self, text, precision, expected):
        """Discarded digits are dropped."""
        assert str(D(text).round_to_zero(precision)) == expected

    def test_result_exponent(self):
        """The result has exponent -precision."""
        result = D("2.567").round_to_zero(2)
        assert (result.integer, result.exponent) == (256, -2)

    def test_aliases(self):
        """truncate() and round_down() are round_to_zero()."""
        value = D("-7.891")
        assert value.truncate(1) == value.round_down(1) == value.round_to_zero(1) == D("-7.8")


class TestRoundAwayFromZero:
    """Tests for rounding up in magnitude."""

    @pytest.mark.parametrize(
        "text,precision,expected",
        [
            ("2.561", 2, "2.57"),
            ("2.560", 2, "2.56"),
            ("-2.561", 2, "-2.57"),
            ("0.001", 0, "1"),
            ("1.0001", 3, "1.001"),
            ("9.991", 2, "10"),
        ],
    )
    def test_values(self, text, precision, expected):
        """Any nonzero discarded digit adds one unit."""
        assert str(D(text).round_away_from_zero(precision)) == expected

    def test_alias(self):
        """round_up() is round_away_from_zero()."""
        assert D("2.561").round_up(2) == D("2.57")


class TestNoRoundingNeeded:
    """Values that already fit are returned unchanged."""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_zero(self, mode):
        """Zero keeps its representation."""
        value = make_decimal(0, -5)
        result = value.round(2, mode)
        assert (result.integer, result.exponent) == (0, -5)

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_non_negative_exponent(self, mode):
        """Integers with positive exponent are untouched."""
        result = D("1e3").round(0, mode)
        assert (result.integer, result.exponent) == (1, 3)

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_within_precision(self, mode):
        """Fewer fractional digits than precision: no padding."""
        result = D("2.5").round(3, mode)
        assert (result.integer, result.exponent) == (25, -1)

    def test_needs_rounding(self):
        """needs_rounding() is the shared short-circuit test."""
        assert needs_rounding(25, -1, 0)
        assert not needs_rounding(25, -1, 1)
        assert not needs_rounding(0, -5, 0)
        assert not needs_rounding(25, 0, 0)


class TestRoundingModes:
    """Tests across all rounding modes."""

    def test_mode_by_name(self):
        """Modes can be given by value string."""
        assert D("2.5").round(0, "nearest_away") == 3
        assert D("2.5").round(0, RoundingMode.TO_ZERO) == 2
        assert D("2.1").round(0, RoundingMode.AWAY_FROM_ZERO) == 3

    def test_unknown_mode_raises(self):
        """Unknown modes are rejected."""
        with pytest.raises(ValueError):
            rounding_function("half_odd")

    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_negative_precision_raises(self, mode):
        """Precision is a count of digits."""
        with pytest.raises(InvalidPrecision, match="negative"):
            D("2.5").round(-1, mode)

    def test_non_int_precision_raises(self):
        """Precision must be an int."""
        with pytest.raises(TypeError):
            D("2.5").round(1.0)  # type: ignore[arg-type]

    @pytest.mark.parametrize("mode", list(RoundingMode))
    @pytest.mark.parametrize("precision", [0, 1, 2, 3, 5])
    def test_idempotent(self, mode, precision):
        """round(round(x, p), p) == round(x, p)."""
        for text in SAMPLES:
            once = D(text).round(precision, mode)
            twice = once.round(precision, mode)
            assert (twice.integer, twice.exponent) == (once.integer, once.exponent)

    @pytest.mark.parametrize("mode", list(RoundingMode))
    @pytest.mark.parametrize("precision", [0, 1, 2, 4])
    def test_matches_standard_library(self, mode, precision):
        """Agrees with decimal.Decimal.quantize for the matching mode."""
        quantum = std_decimal.Decimal(1).scaleb(-precision)
        with std_decimal.localcontext() as ctx:
            ctx.prec = 100
            for text in SAMPLES:
                expected = std_decimal.Decimal(text).quantize(quantum, rounding=STD_ROUNDING[mode])
                assert D(text).round(precision, mode) == Decimal.parse(str(expected)), text

    def test_does_not_mutate_receiver(self):
        """Rounding returns a new value."""
        value = D("2.567")
        value.round_to_zero(1)
        value.round_to_nearest_away(1)
        assert (value.integer, value.exponent) == (2567, -3)
