"""
Cart and order price calculation.

Both the cart preview and checkout go through PricingCalculator so a
client never sees a total that differs from the one stored on the order.

Usage:
    from orders.calculators import CartLine, DeliveryPolicy, PricingCalculator

    breakdown = PricingCalculator.compute_totals(lines, establishment.delivery_policy())
    breakdown.total  # Decimal('60.00')
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional

from payments.money import quantize, to_decimal

from .exceptions import InvalidLineItem

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CartLine:
    """One catalog item at a quoted unit price."""

    catalog_item_id: int
    unit_price: Decimal
    quantity: int
    establishment_id: Optional[int] = None
    name: str = ""


@dataclass(frozen=True)
class DeliveryPolicy:
    """
    Delivery charges for an establishment.

    Orders whose subtotal reaches ``free_threshold`` ship free; a zero
    threshold makes delivery always free.
    """

    fee_amount: Decimal = ZERO
    free_threshold: Decimal = ZERO

    def __post_init__(self):
        fee = to_decimal(self.fee_amount)
        threshold = to_decimal(self.free_threshold)
        if fee < 0 or threshold < 0:
            raise ValueError("Delivery fee and free-delivery threshold must not be negative")
        object.__setattr__(self, "fee_amount", fee)
        object.__setattr__(self, "free_threshold", threshold)


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal

    def to_dict(self) -> Dict[str, str]:
        return {
            "subtotal": str(self.subtotal),
            "delivery_fee": str(self.delivery_fee),
            "total": str(self.total),
        }


class PricingCalculator:
    """
    Stateless price calculation for a list of cart lines.

    Intermediate sums are kept unrounded; subtotal, fee and total are
    rounded half-up to cents once, at the end, with
    total == subtotal + delivery_fee holding on the rounded values.
    """

    @staticmethod
    def validate_line(line: CartLine) -> Decimal:
        """Return the line's unrounded total, raising InvalidLineItem if it is invalid."""
        quantity = line.quantity
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
            raise InvalidLineItem(line)
        try:
            price = to_decimal(line.unit_price)
        except ValueError:
            raise InvalidLineItem(line, f"Unparseable price {line.unit_price!r} for catalog item {line.catalog_item_id}")
        if price < 0:
            raise InvalidLineItem(line)
        return price * quantity

    @staticmethod
    def calculate_subtotal(lines: Iterable[CartLine]) -> Decimal:
        """Unrounded sum of price × quantity."""
        return sum((PricingCalculator.validate_line(line) for line in lines), Decimal("0"))

    @staticmethod
    def calculate_delivery_fee(subtotal: Decimal, policy: DeliveryPolicy) -> Decimal:
        """Fee charged for a given subtotal; free once the threshold is reached."""
        if subtotal >= policy.free_threshold:
            return ZERO
        return policy.fee_amount

    @staticmethod
    def compute_totals(lines: Iterable[CartLine], policy: Optional[DeliveryPolicy] = None) -> PriceBreakdown:
        """
        Price a list of lines under a delivery policy.

        Raises:
            InvalidLineItem: For a negative price or quantity.

        Examples:
            lines [40.00 x1, 10.00 x2], fee 10.00, threshold 50.00
            -> subtotal 60.00, delivery_fee 0.00, total 60.00
        """
        if policy is None:
            policy = DeliveryPolicy()

        subtotal = quantize(PricingCalculator.calculate_subtotal(lines))
        delivery_fee = quantize(PricingCalculator.calculate_delivery_fee(subtotal, policy))
        return PriceBreakdown(
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
        )

    @staticmethod
    def line_total(line: CartLine) -> Decimal:
        """Rounded total for a single line, for display next to the item."""
        return quantize(PricingCalculator.validate_line(line))
