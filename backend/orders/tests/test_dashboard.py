"""
Dashboard Tests

Live-queue visibility (store open, same local day) and daily statistics.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest
import pytz

from business_hours.schedule import DaySchedule, WeeklySchedule
from orders.dashboard import DailyStats, DashboardVisibilityFilter, format_duration
from orders.domain import OrderRecord
from orders.status import OrderStatus

pytestmark = pytest.mark.unit

SAO_PAULO = pytz.timezone('America/Sao_Paulo')

OPEN_ALL_DAY = WeeklySchedule.from_days(
    DaySchedule(day, open_time="00:00", close_time="23:59") for day in range(7)
)
CLOSED_ALL_WEEK = WeeklySchedule.from_days(DaySchedule(day, closed=True) for day in range(7))

# Monday 2024-01-15, 14:00 in São Paulo
NOW = SAO_PAULO.localize(datetime(2024, 1, 15, 14, 0))


def order(order_id, placed_at, status=OrderStatus.AWAITING_PAYMENT, total="50.00", minutes=None):
    updated = placed_at + timedelta(minutes=minutes) if minutes is not None else placed_at
    return OrderRecord(
        order_id=order_id,
        establishment_id=1,
        client_id=1,
        status=status,
        placed_at=placed_at,
        last_updated_at=updated,
        total=Decimal(total),
    )


class TestVisibleOrders:
    """Test which orders appear in the live queue"""

    def test_todays_orders_visible_when_open(self):
        orders = [
            order(1, NOW - timedelta(hours=2)),
            order(2, NOW - timedelta(days=1)),
        ]

        visible = DashboardVisibilityFilter.visible_orders(orders, OPEN_ALL_DAY, NOW)

        assert [o.order_id for o in visible] == [1]

    def test_nothing_visible_when_closed(self):
        orders = [order(1, NOW - timedelta(hours=1))]
        assert DashboardVisibilityFilter.visible_orders(orders, CLOSED_ALL_WEEK, NOW) == []

    def test_unconfigured_schedule_shows_nothing(self):
        orders = [order(1, NOW - timedelta(hours=1))]
        assert DashboardVisibilityFilter.visible_orders(orders, WeeklySchedule(), NOW) == []

    def test_day_is_judged_in_local_time(self):
        # 01:30 UTC on Tuesday is still Monday 22:30 in São Paulo
        late_monday = pytz.utc.localize(datetime(2024, 1, 16, 1, 30))
        # 02:30 UTC on Monday is Sunday 23:30 in São Paulo
        late_sunday = pytz.utc.localize(datetime(2024, 1, 15, 2, 30))

        visible = DashboardVisibilityFilter.visible_orders(
            [order(1, late_monday), order(2, late_sunday)], OPEN_ALL_DAY, NOW
        )

        assert [o.order_id for o in visible] == [1]

    def test_orders_without_timestamp_skipped(self):
        orders = [order(1, NOW), order(2, None)]
        visible = DashboardVisibilityFilter.visible_orders(orders, OPEN_ALL_DAY, NOW)
        assert [o.order_id for o in visible] == [1]


class TestDailyStats:
    """Test today's numbers"""

    def test_stats(self):
        orders = [
            order(1, NOW - timedelta(hours=3), OrderStatus.DELIVERED, "60.00", minutes=30),
            order(2, NOW - timedelta(hours=2), OrderStatus.DELIVERED, "45.98", minutes=60),
            order(3, NOW - timedelta(hours=1), OrderStatus.CANCELLED, "99.00"),
            order(4, NOW - timedelta(minutes=5), OrderStatus.IN_PREPARATION, "10.00"),
            order(5, NOW - timedelta(days=1), OrderStatus.DELIVERED, "500.00", minutes=10),
        ]

        stats = DashboardVisibilityFilter.daily_stats(orders, NOW)

        assert stats == DailyStats(
            orders_today=4,
            average_handling_time=timedelta(minutes=45),
            revenue=Decimal("115.98"),
        )

    def test_stats_reported_even_when_closed(self):
        stats = DashboardVisibilityFilter.daily_stats([order(1, NOW)], NOW)
        assert stats.orders_today == 1

    def test_no_orders(self):
        stats = DashboardVisibilityFilter.daily_stats([], NOW)
        assert stats == DailyStats(0, None, Decimal("0.00"))


class TestFormatDuration:

    @pytest.mark.parametrize("duration,expected", [
        (None, "0 min"),
        (timedelta(seconds=30), "0 min"),
        (timedelta(minutes=45), "45 min"),
        (timedelta(hours=2), "2h"),
        (timedelta(minutes=90), "1h 30min"),
    ])
    def test_format(self, duration, expected):
        assert format_duration(duration) == expected
