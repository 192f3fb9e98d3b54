"""
Client-side services built on the marketplace API.

They fetch through MarketplaceAPIClient, decode the payloads and then run
the same availability, pricing and status rules the server uses, so the
apps can answer "is it open?" or "can I move this order?" without a round
trip, and reject illegal requests before anything is sent.
"""
import logging
from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional, Tuple

import pytz
from django.utils import timezone

from business_hours.availability import Availability, AvailabilityEvaluator
from business_hours.exceptions import InvalidWeeklySchedule
from business_hours.schedule import DaySchedule, WeeklySchedule
from cart.aggregator import CartAggregator, CartSnapshot, MappingCatalog
from cart.exceptions import UnknownCatalogItem
from orders.calculators import PriceBreakdown
from orders.dashboard import DailyStats, DashboardVisibilityFilter
from orders.domain import OrderRecord
from orders.status import OrderStatus, OrderStatusMachine

from .decoders import decode_cart, decode_order, decode_price_breakdown, decode_weekly_schedule
from .exceptions import NetworkFailure
from .marketplace_api import MarketplaceAPIClient
from .session import ApiSession

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Sao_Paulo"


def localize(at: Optional[datetime], tz_name: Optional[str]) -> datetime:
    """Express ``at`` (default: now) in ``tz_name``."""
    if at is None:
        at = timezone.now()
    try:
        business_tz = pytz.timezone(tz_name or DEFAULT_TIMEZONE)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown timezone {tz_name!r}, using {DEFAULT_TIMEZONE}")
        business_tz = pytz.timezone(DEFAULT_TIMEZONE)
    if at.tzinfo is None:
        return business_tz.localize(at)
    return at.astimezone(business_tz)


class StoreStatusService:
    """Opening status of an establishment, computed from its published hours."""

    def __init__(self, api: Optional[MarketplaceAPIClient] = None):
        self.api = api or MarketplaceAPIClient()

    def fetch_schedule(self, session: ApiSession, establishment_id: Optional[int] = None) -> Tuple[WeeklySchedule, str]:
        """The establishment's week and its timezone name."""
        payload = self.api.get_establishment(session, establishment_id)
        schedule = decode_weekly_schedule(payload.get("business_hours") or ())
        return schedule, payload.get("timezone") or DEFAULT_TIMEZONE

    def evaluate(self, session: ApiSession, at: Optional[datetime] = None,
                 establishment_id: Optional[int] = None) -> Availability:
        schedule, tz_name = self.fetch_schedule(session, establishment_id)
        return AvailabilityEvaluator.evaluate(schedule, localize(at, tz_name))

    def is_open(self, session: ApiSession, at: Optional[datetime] = None,
                establishment_id: Optional[int] = None) -> bool:
        return self.evaluate(session, at, establishment_id).is_open

    def save_week(self, session: ApiSession, days: Iterable[DaySchedule]) -> WeeklySchedule:
        """
        Replace the session establishment's hours.

        The week is checked locally first; an incomplete or duplicated week
        raises InvalidWeeklySchedule without contacting the API.
        """
        schedule = WeeklySchedule.from_days(days)
        if not schedule.is_full_week:
            raise InvalidWeeklySchedule(
                f"Business hours must cover all 7 weekdays, got {len(schedule)}"
            )
        rows = self.api.save_business_hours(session, schedule)
        logger.info(f"Saved business hours for establishment {session.establishment_id}")
        return decode_weekly_schedule(rows)


class EstablishmentOrdersService:
    """Operator-side view of an establishment's orders."""

    def __init__(self, api: Optional[MarketplaceAPIClient] = None,
                 status_service: Optional[StoreStatusService] = None):
        self.api = api or MarketplaceAPIClient()
        self.status_service = status_service or StoreStatusService(self.api)

    def fetch_orders(self, session: ApiSession, status: Optional[OrderStatus] = None) -> List[OrderRecord]:
        payload = self.api.get_establishment_orders(session, status.value if status else None)
        return [decode_order(item) for item in payload or ()]

    def live_orders(self, session: ApiSession, at: Optional[datetime] = None) -> List[OrderRecord]:
        """Today's orders, or none while the establishment is closed."""
        schedule, tz_name = self.status_service.fetch_schedule(session)
        today = localize(at, tz_name)
        if not AvailabilityEvaluator.is_open(schedule, today):
            return []
        return DashboardVisibilityFilter.visible_orders(self.fetch_orders(session), schedule, today)

    def today_stats(self, session: ApiSession, at: Optional[datetime] = None) -> DailyStats:
        _, tz_name = self.status_service.fetch_schedule(session)
        return DashboardVisibilityFilter.daily_stats(self.fetch_orders(session), localize(at, tz_name))

    def update_status(self, session: ApiSession, order: OrderRecord, target) -> OrderRecord:
        """
        Move ``order`` to ``target``.

        Raises:
            IllegalTransition: Before any request is made, if the move is not
                in the transition table.
        """
        target = OrderStatusMachine.decode_status(target)
        OrderStatusMachine.check_transition(order.status, target)

        payload = self.api.update_order_status(session, order.order_id, target.value)
        logger.info(f"Order {order.order_id} moved from '{order.status}' to '{target}'")
        return decode_order(payload)


class CartMutation(NamedTuple):
    """A local cart change: the snapshot before it and the one after."""

    previous: CartSnapshot
    current: CartSnapshot

    def rollback(self) -> CartSnapshot:
        return self.previous


class CartClientService:
    """Client-side cart with optimistic quantity changes."""

    def __init__(self, api: Optional[MarketplaceAPIClient] = None):
        self.api = api or MarketplaceAPIClient()

    def load(self, session: ApiSession) -> Tuple[CartSnapshot, MappingCatalog]:
        """
        The cart and the catalog prices it was priced with.

        Totals the server sent are compared with a local pricing of the same
        cart; a mismatch is logged, the server figures stay authoritative.
        """
        payload = self.api.get_cart(session)
        cart, catalog = decode_cart(payload)

        if payload.get("totais"):
            server_totals = decode_price_breakdown(payload["totais"])
            local_totals = self.totals(cart, catalog)
            if server_totals != local_totals:
                logger.warning(
                    f"Cart {cart.cart_id} totals differ: server {server_totals.to_dict()}, "
                    f"local {local_totals.to_dict()}"
                )
        return cart, catalog

    @staticmethod
    def totals(cart: CartSnapshot, catalog: MappingCatalog) -> PriceBreakdown:
        return CartAggregator.price_cart(cart, catalog)

    @staticmethod
    def preview_quantity(cart: CartSnapshot, catalog_item_id: int, quantity: int) -> CartMutation:
        """Apply a quantity change locally, before the API confirms it."""
        if cart.entry_for(catalog_item_id) is None:
            raise UnknownCatalogItem(catalog_item_id)
        return CartMutation(
            previous=cart,
            current=CartAggregator.with_quantity(cart, catalog_item_id, quantity),
        )

    def update_quantity(self, session: ApiSession, cart: CartSnapshot,
                        catalog_item_id: int, quantity: int) -> CartMutation:
        """
        Set an entry's quantity; below 1 removes it.

        Returns the mutation on success. On NetworkFailure the error is
        re-raised and the caller restores ``cart``, the pre-change snapshot.
        """
        mutation = self.preview_quantity(cart, catalog_item_id, quantity)
        item_id = cart.entry_for(catalog_item_id).item_id
        if item_id is None:
            raise UnknownCatalogItem(catalog_item_id, "Cart entry has not been saved yet")

        try:
            if quantity < 1:
                self.api.remove_cart_item(session, item_id)
            else:
                self.api.update_cart_item(session, item_id, quantity)
        except NetworkFailure as e:
            logger.warning(f"Cart update for item {catalog_item_id} failed, rolling back: {e}")
            raise

        return mutation

    def remove(self, session: ApiSession, cart: CartSnapshot, catalog_item_id: int) -> CartMutation:
        return self.update_quantity(session, cart, catalog_item_id, 0)
