"""Unit tests for fixed-point amount formatting."""

from decimal import Decimal

import pytest

from calabi_deployments.exceptions import InvalidAmountError
from calabi_deployments.formatting import format_amount


class TestFormatAmount:
    """Test the format_amount function."""

    def test_one_token_default_decimals(self):
        assert format_amount(1) == "1000000000000000000"

    def test_one_token_explicit_decimals(self):
        assert format_amount(1, 18) == "1000000000000000000"

    def test_half_with_six_decimals(self):
        assert format_amount(0.5, 6) == "500000"

    def test_zero(self):
        assert format_amount(0) == "0"
        assert format_amount(0.0, 6) == "0"

    def test_zero_decimals(self):
        assert format_amount(42, 0) == "42"

    def test_float_uses_shortest_repr(self):
        """Test that 0.1 is one tenth, not its binary approximation."""
        assert format_amount(0.1, 18) == "100000000000000000"
        assert format_amount(1.1, 18) == "1100000000000000000"

    def test_no_scientific_notation(self):
        """Test that large amounts are written out in full."""
        assert format_amount(1e21, 18) == "1" + "0" * 39
        assert format_amount(10**30, 18) == "1" + "0" * 48

    def test_large_integer_is_exact(self):
        """Test that integers beyond float precision are not rounded."""
        value = 123456789012345678901234567890
        assert format_amount(value, 18) == str(value) + "0" * 18

    def test_decimal_input(self):
        assert format_amount(Decimal("2.25"), 6) == "2250000"

    def test_string_input(self):
        assert format_amount("1000.5", 6) == "1000500000"
        assert format_amount(" 3 ", 2) == "300"

    def test_exponent_string_input(self):
        assert format_amount("1e-6", 6) == "1"

    def test_smallest_unit(self):
        assert format_amount(0.000001, 6) == "1"

    def test_trailing_zero_digits_beyond_precision_are_allowed(self):
        """Test that zeros past the precision do not count as extra digits."""
        assert format_amount(Decimal("1.500000000"), 6) == "1500000"

    def test_negative_zero(self):
        assert format_amount(-0.0, 18) == "0"


class TestFormatAmountErrors:
    """Test the inputs format_amount rejects."""

    def test_negative(self):
        with pytest.raises(InvalidAmountError):
            format_amount(-1, 18)

    def test_negative_fraction(self):
        with pytest.raises(InvalidAmountError):
            format_amount(-0.5, 6)

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), "Infinity", "NaN"])
    def test_not_finite(self, value):
        with pytest.raises(InvalidAmountError):
            format_amount(value)

    @pytest.mark.parametrize("value", ["abc", "", None, [1], True])
    def test_not_numeric(self, value):
        with pytest.raises(InvalidAmountError):
            format_amount(value)

    def test_too_many_fractional_digits(self):
        """Test that amounts finer than the token precision are rejected."""
        with pytest.raises(InvalidAmountError) as exc_info:
            format_amount(0.1234567, 6)

        assert "6" in str(exc_info.value)

    @pytest.mark.parametrize("decimals", [-1, 1.5, "18", True])
    def test_invalid_decimals(self, decimals):
        with pytest.raises(InvalidAmountError):
            format_amount(1, decimals)

    def test_catchable_as_value_error(self):
        with pytest.raises(ValueError):
            format_amount(-1)
