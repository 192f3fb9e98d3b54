"""
Establishment dashboard: which orders are live and today's numbers.
"""
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, NamedTuple, Optional

from business_hours.availability import AvailabilityEvaluator
from business_hours.schedule import WeeklySchedule
from payments.money import quantize

from .status import OrderStatus, OrderStatusMachine


class DailyStats(NamedTuple):
    orders_today: int
    average_handling_time: Optional[timedelta]
    revenue: Decimal


def local_date(moment: datetime, reference: datetime) -> date:
    """Calendar date of ``moment`` as seen from ``reference``'s timezone."""
    if moment.tzinfo is not None and reference.tzinfo is not None:
        return moment.astimezone(reference.tzinfo).date()
    return moment.date()


def format_duration(duration: Optional[timedelta]) -> str:
    """
    Render a handling time the way the dashboard shows it.

    >>> format_duration(timedelta(minutes=45))
    '45 min'
    >>> format_duration(timedelta(minutes=90))
    '1h 30min'
    """
    if duration is None:
        return "0 min"
    minutes = int(duration.total_seconds() // 60)
    if minutes <= 0:
        return "0 min"
    if minutes < 60:
        return f"{minutes} min"

    hours, minutes = divmod(minutes, 60)
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}min"


class DashboardVisibilityFilter:

    @staticmethod
    def orders_placed_on(orders: Iterable, today: datetime) -> List:
        day = today.date()
        return [
            order for order in orders
            if isinstance(order.placed_at, datetime) and local_date(order.placed_at, today) == day
        ]

    @staticmethod
    def visible_orders(orders: Iterable, schedule: WeeklySchedule, today: datetime) -> List:
        """
        Orders an operator sees in the live queue at ``today``.

        Nothing is shown while the establishment is closed; otherwise the
        orders placed on the same local calendar day as ``today``.
        """
        if not AvailabilityEvaluator.is_open(schedule, today):
            return []
        return DashboardVisibilityFilter.orders_placed_on(orders, today)

    @staticmethod
    def daily_stats(orders: Iterable, today: datetime) -> DailyStats:
        """
        Count, average handling time and revenue for orders placed on
        ``today``'s local date. Cancelled orders do not count as revenue.
        """
        todays = DashboardVisibilityFilter.orders_placed_on(orders, today)
        revenue = sum(
            (order.total for order in todays if order.status != OrderStatus.CANCELLED),
            Decimal("0"),
        )
        return DailyStats(
            orders_today=len(todays),
            average_handling_time=OrderStatusMachine.average_handling_time(todays),
            revenue=quantize(revenue),
        )
