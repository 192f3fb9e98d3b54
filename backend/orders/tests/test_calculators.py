"""
Pricing Tests

Subtotal, delivery fee and total for cart lines under an establishment's
delivery policy, including rounding and invalid input.
"""

from decimal import Decimal

import pytest

from orders.calculators import CartLine, DeliveryPolicy, PriceBreakdown, PricingCalculator
from orders.exceptions import InvalidLineItem

pytestmark = pytest.mark.unit


def line(price, quantity, item_id=1):
    return CartLine(catalog_item_id=item_id, unit_price=Decimal(price), quantity=quantity)


BASKET = [line("40.00", 1, 1), line("10.00", 2, 2)]


class TestComputeTotals:
    """Test PricingCalculator.compute_totals"""

    def test_free_delivery_above_threshold(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("50.00"))

        result = PricingCalculator.compute_totals(BASKET, policy)

        assert result == PriceBreakdown(Decimal("60.00"), Decimal("0.00"), Decimal("60.00"))

    def test_fee_below_threshold(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("100.00"))

        result = PricingCalculator.compute_totals(BASKET, policy)

        assert result == PriceBreakdown(Decimal("60.00"), Decimal("10.00"), Decimal("70.00"))

    def test_threshold_reached_exactly_is_free(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("60.00"))
        assert PricingCalculator.compute_totals(BASKET, policy).delivery_fee == Decimal("0.00")

    def test_zero_threshold_always_free(self):
        policy = DeliveryPolicy(Decimal("8.00"), Decimal("0.00"))
        assert PricingCalculator.compute_totals([line("5.00", 1)], policy).delivery_fee == Decimal("0.00")

    def test_rounds_once_at_the_end(self):
        lines = [line("19.99", 1, 1), line("12.995", 2, 2)]

        result = PricingCalculator.compute_totals(lines)

        assert result.subtotal == Decimal("45.98")
        assert result.total == Decimal("45.98")

    def test_total_is_subtotal_plus_fee(self):
        policy = DeliveryPolicy(Decimal("7.333"), Decimal("1000"))
        result = PricingCalculator.compute_totals([line("3.335", 3)], policy)

        assert result.subtotal == Decimal("10.01")
        assert result.delivery_fee == Decimal("7.33")
        assert result.total == result.subtotal + result.delivery_fee

    def test_empty_cart_pays_fee_below_threshold(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("50.00"))

        result = PricingCalculator.compute_totals([], policy)

        assert result == PriceBreakdown(Decimal("0.00"), Decimal("10.00"), Decimal("10.00"))

    def test_empty_cart_without_policy(self):
        assert PricingCalculator.compute_totals([]) == PriceBreakdown(
            Decimal("0.00"), Decimal("0.00"), Decimal("0.00")
        )

    def test_zero_quantity_contributes_nothing(self):
        result = PricingCalculator.compute_totals([line("40.00", 0), line("10.00", 1)])
        assert result.subtotal == Decimal("10.00")

    def test_to_dict(self):
        result = PricingCalculator.compute_totals(BASKET, DeliveryPolicy(Decimal("10.00"), Decimal("100.00")))
        assert result.to_dict() == {"subtotal": "60.00", "delivery_fee": "10.00", "total": "70.00"}


class TestInvalidLines:
    """Test rejection of negative or malformed lines"""

    def test_negative_price(self):
        with pytest.raises(InvalidLineItem):
            PricingCalculator.compute_totals([line("-1.00", 1)])

    def test_negative_quantity(self):
        with pytest.raises(InvalidLineItem):
            PricingCalculator.compute_totals([line("1.00", -2)])

    def test_non_integer_quantity(self):
        with pytest.raises(InvalidLineItem):
            PricingCalculator.compute_totals([CartLine(1, Decimal("1.00"), 1.5)])

    def test_unparseable_price(self):
        with pytest.raises(InvalidLineItem):
            PricingCalculator.compute_totals([CartLine(1, "abc", 1)])

    def test_negative_policy_rejected(self):
        with pytest.raises(ValueError):
            DeliveryPolicy(Decimal("-1.00"), Decimal("50.00"))


class TestMonotonicity:
    """Adding items never lowers the subtotal"""

    @pytest.mark.parametrize("extra_price,extra_quantity", [("0.01", 1), ("15.50", 3), ("0.00", 4)])
    def test_subtotal_never_decreases(self, extra_price, extra_quantity):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("100.00"))
        before = PricingCalculator.compute_totals(BASKET, policy)
        after = PricingCalculator.compute_totals(BASKET + [line(extra_price, extra_quantity, 3)], policy)

        assert after.subtotal >= before.subtotal

    def test_total_never_decreases_on_same_side_of_threshold(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("100.00"))
        before = PricingCalculator.compute_totals(BASKET, policy)
        after = PricingCalculator.compute_totals(BASKET + [line("20.00", 1, 3)], policy)

        assert after.delivery_fee == before.delivery_fee
        assert after.total >= before.total

    def test_crossing_threshold_drops_fee_only(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("65.00"))
        before = PricingCalculator.compute_totals(BASKET, policy)
        after = PricingCalculator.compute_totals(BASKET + [line("5.00", 1, 3)], policy)

        assert before.total == Decimal("70.00")
        assert after.total == Decimal("65.00")
        assert after.total >= after.subtotal


class TestLineTotal:

    def test_line_total_rounded(self):
        assert PricingCalculator.line_total(line("12.995", 2)) == Decimal("25.99")
