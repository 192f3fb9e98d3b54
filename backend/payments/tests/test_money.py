"""
Unit tests for payments.money module.

Every cart and order total is rounded here, so these tests pin down the
rounding mode and the accepted input formats.
"""

import pytest
from decimal import Decimal

from payments.money import format_money, quantize, to_decimal

pytestmark = pytest.mark.unit


class TestToDecimal:
    """Test conversion of raw inputs to Decimal."""

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_comma_decimal_separator(self):
        assert to_decimal("12,50") == Decimal("12.50")

    def test_decimal_passes_through(self):
        value = Decimal("19.995")
        assert to_decimal(value) is value

    @pytest.mark.parametrize("bad", ["abc", "", None, True, "NaN", "Infinity"])
    def test_rejects_non_numeric(self, bad):
        with pytest.raises(ValueError):
            to_decimal(bad)


class TestQuantize:
    """Test half-up rounding to centavos."""

    def test_rounds_half_up(self):
        assert quantize("10.125") == Decimal("10.13")
        assert quantize("10.135") == Decimal("10.14")

    def test_rounds_down_below_half(self):
        assert quantize("10.124") == Decimal("10.12")

    def test_result_has_two_places(self):
        assert str(quantize(60)) == "60.00"


class TestFormatMoney:
    """Test display formatting."""

    def test_brazilian_separators(self):
        assert format_money("1234.5") == "R$ 1.234,50"

    def test_small_amount(self):
        assert format_money("45.98") == "R$ 45,98"

    def test_rounds_before_formatting(self):
        assert format_money("0.005") == "R$ 0,01"
