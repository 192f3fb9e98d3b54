"""
Plain order records used by the status machine and the dashboard.

Django models convert to these with ``Order.to_record()``; the API client
builds them with ``integrations.decoders.decode_order``.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from payments.money import quantize

from .status import OrderStatus


@dataclass(frozen=True)
class OrderItemRecord:
    catalog_item_id: Optional[int]
    name: str
    unit_price: Decimal
    quantity: int

    @property
    def total_price(self) -> Decimal:
        return quantize(self.unit_price * self.quantity)


@dataclass(frozen=True)
class OrderRecord:
    order_id: int
    establishment_id: Optional[int]
    client_id: Optional[int]
    status: OrderStatus
    placed_at: Optional[datetime]
    last_updated_at: Optional[datetime]
    total: Decimal = Decimal("0.00")
    subtotal: Decimal = Decimal("0.00")
    delivery_fee: Decimal = Decimal("0.00")
    items: Tuple[OrderItemRecord, ...] = field(default_factory=tuple)
