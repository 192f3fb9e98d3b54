"""
Order lifecycle.

AwaitingPayment -> InPreparation -> InTransit -> Delivered, with
cancellation possible until the order leaves the store. Delivered and
Cancelled are terminal.
"""
import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from django.db import models
from django.utils.translation import gettext_lazy as _

from .exceptions import IllegalTransition

logger = logging.getLogger(__name__)


class OrderStatus(models.TextChoices):
    # Values are the labels shown to clients and operators
    AWAITING_PAYMENT = "Aguardando Pagamento", _("Awaiting payment")
    IN_PREPARATION = "Em Separação", _("In preparation")
    IN_TRANSIT = "Em Rota", _("In transit")
    DELIVERED = "Entregue", _("Delivered")
    CANCELLED = "Cancelado", _("Cancelled")


class OrderStatusMachine:
    """Transition table and helpers for OrderStatus."""

    INITIAL_STATUS = OrderStatus.AWAITING_PAYMENT

    VALID_STATUS_TRANSITIONS = {
        OrderStatus.AWAITING_PAYMENT: (
            OrderStatus.IN_PREPARATION,
            OrderStatus.CANCELLED,
        ),
        OrderStatus.IN_PREPARATION: (
            OrderStatus.IN_TRANSIT,
            OrderStatus.CANCELLED,
        ),
        OrderStatus.IN_TRANSIT: (
            OrderStatus.DELIVERED,
        ),
        OrderStatus.DELIVERED: (),
        OrderStatus.CANCELLED: (),
    }

    @staticmethod
    def allowed_targets(status) -> Tuple[OrderStatus, ...]:
        return OrderStatusMachine.VALID_STATUS_TRANSITIONS.get(status, ())

    @staticmethod
    def is_terminal(status) -> bool:
        return not OrderStatusMachine.allowed_targets(status)

    @staticmethod
    def can_transition(source, target) -> bool:
        return target in OrderStatusMachine.allowed_targets(source)

    @staticmethod
    def check_transition(source, target) -> None:
        """
        Raises:
            IllegalTransition: If ``target`` is not reachable from ``source``.
        """
        if not OrderStatusMachine.can_transition(source, target):
            raise IllegalTransition(source, target)

    @staticmethod
    def transition(order, target, at: datetime):
        """
        Move an order record to ``target``.

        Returns a new record with ``status`` and ``last_updated_at`` set; the
        record passed in is never modified.

        Raises:
            IllegalTransition: If the move is not in the transition table.
        """
        OrderStatusMachine.check_transition(order.status, target)
        return replace(order, status=OrderStatus(target), last_updated_at=at)

    @staticmethod
    def decode_status(label) -> OrderStatus:
        """
        Map an external status label onto OrderStatus.

        Matching ignores case and surrounding whitespace. Unknown labels decode
        to AWAITING_PAYMENT with a data-quality warning so that one bad row
        does not break a whole listing.
        """
        if isinstance(label, OrderStatus):
            return label
        if isinstance(label, str):
            normalized = label.strip().casefold()
            for status in OrderStatus:
                if status.value.casefold() == normalized or status.name.casefold() == normalized:
                    return status

        logger.warning(f"Unknown order status label {label!r}, treating as '{OrderStatusMachine.INITIAL_STATUS.value}'")
        return OrderStatusMachine.INITIAL_STATUS

    @staticmethod
    def handling_time(order) -> Optional[timedelta]:
        """Time from placement to the last status change, or None if unknown."""
        placed_at = order.placed_at
        updated_at = order.last_updated_at
        if not isinstance(placed_at, datetime) or not isinstance(updated_at, datetime):
            return None
        try:
            elapsed = updated_at - placed_at
        except TypeError:
            # Naive and aware timestamps cannot be compared
            return None
        if elapsed < timedelta(0):
            return None
        return elapsed

    @staticmethod
    def average_handling_time(orders: Iterable) -> Optional[timedelta]:
        """
        Mean handling time over delivered orders.

        Orders without usable timestamps are left out rather than counted as
        zero. Returns None when no delivered order qualifies.
        """
        durations = []
        for order in orders:
            if order.status != OrderStatus.DELIVERED:
                continue
            elapsed = OrderStatusMachine.handling_time(order)
            if elapsed is not None:
                durations.append(elapsed)

        if not durations:
            return None
        return sum(durations, timedelta(0)) / len(durations)
