import logging
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone

from business_hours.services import BusinessHoursService
from cart.aggregator import CartAggregator
from cart.exceptions import EmptyCartError
from cart.models import Cart
from cart.services import CartService
from products.catalog import DatabaseCatalog

from ..exceptions import EstablishmentClosed
from ..models import Order, OrderItem
from ..status import OrderStatus, OrderStatusMachine

logger = logging.getLogger(__name__)


class OrderService:
    """Checkout and order lifecycle."""

    @staticmethod
    @transaction.atomic
    def create_order_from_cart(
        cart: Cart,
        address=None,
        payment_method=None,
        notes: str = "",
        at: Optional[datetime] = None,
    ) -> Order:
        """
        Convert a Cart to an Order (atomic transaction).

        Lifecycle:
        1. Price the cart with current catalog prices (strict: unavailable items fail)
        2. Refuse if the establishment is closed
        3. Create Order in AWAITING_PAYMENT with the computed totals
        4. Create OrderItems with SNAPSHOT names and prices
        5. Empty the cart

        Raises:
            EmptyCartError: If the cart has no items.
            UnknownCatalogItem: If an item is no longer sold.
            EstablishmentClosed: If the establishment is closed right now.
        """
        cart = Cart.objects.select_for_update().select_related('establishment', 'client').get(pk=cart.pk)
        snapshot = cart.to_snapshot()
        if snapshot.is_empty or cart.establishment is None:
            raise EmptyCartError()

        establishment = cart.establishment
        hours = BusinessHoursService(establishment)
        if not hours.is_open(at):
            raise EstablishmentClosed(establishment, hours.get_next_opening_time(at))

        catalog = DatabaseCatalog().prefetch(entry.catalog_item_id for entry in snapshot.entries)
        lines = CartAggregator.to_line_items(snapshot, catalog)
        if not lines:
            raise EmptyCartError()
        breakdown = CartAggregator.price_cart(snapshot, catalog)

        order = Order.objects.create(
            establishment=establishment,
            client=cart.client,
            address=address,
            payment_method=payment_method,
            notes=notes,
            status=OrderStatusMachine.INITIAL_STATUS,
            subtotal=breakdown.subtotal,
            delivery_fee=breakdown.delivery_fee,
            total=breakdown.total,
            placed_at=at or timezone.now(),
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                catalog_item_id=line.catalog_item_id,
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
            for line in lines
        ])

        CartService.clear_cart(cart)

        logger.info(
            f"Order {order.pk} placed by client {cart.client_id} at establishment {establishment.pk}: "
            f"subtotal {breakdown.subtotal}, delivery {breakdown.delivery_fee}, total {breakdown.total}"
        )
        return order

    @staticmethod
    @transaction.atomic
    def update_order_status(order: Order, new_status) -> Order:
        """
        Move an order to ``new_status``.

        The row is locked and re-read so that two operators acting at once
        cannot both move it from the same state.

        Raises:
            IllegalTransition: If the transition table does not allow it.
        """
        order = Order.objects.select_for_update().get(pk=order.pk)
        current = OrderStatusMachine.decode_status(order.status)
        OrderStatusMachine.check_transition(current, new_status)

        old_status = order.status
        order.status = OrderStatus(new_status)
        order.save(update_fields=['status', 'updated_at'])

        logger.info(f"Order {order.pk} status changed: {old_status} -> {order.status}")
        return order

    @staticmethod
    def orders_for_establishment(establishment):
        return (
            Order.objects.filter(establishment=establishment)
            .select_related('client', 'address', 'payment_method')
            .prefetch_related('items')
        )

    @staticmethod
    def orders_for_client(client):
        return (
            Order.objects.filter(client=client)
            .select_related('establishment', 'address', 'payment_method')
            .prefetch_related('items')
        )
