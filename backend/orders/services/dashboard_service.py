import logging
from datetime import datetime, timedelta
from typing import List, Optional

from business_hours.services import BusinessHoursService

from ..dashboard import DailyStats, DashboardVisibilityFilter
from ..models import Order
from .order_service import OrderService

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Live order queue and daily numbers for an establishment operator.

    "Today" and "open" are both judged in the establishment's timezone.
    """

    def __init__(self, establishment):
        self.establishment = establishment

    def _todays_orders(self, local_now: datetime) -> List[Order]:
        start_of_day = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        # One extra day on each side; the exact local-date match happens in the filter
        return list(
            OrderService.orders_for_establishment(self.establishment).filter(
                placed_at__gte=start_of_day - timedelta(days=1),
                placed_at__lt=start_of_day + timedelta(days=2),
            )
        )

    def live_orders(self, at: Optional[datetime] = None) -> List[Order]:
        """Orders shown in the live queue: none while closed, else today's."""
        local_now = self.establishment.localize(at)
        schedule = BusinessHoursService(self.establishment).get_schedule()

        orders = self._todays_orders(local_now)
        visible = DashboardVisibilityFilter.visible_orders(
            [order.to_record() for order in orders], schedule, local_now
        )
        visible_ids = {record.order_id for record in visible}
        return [order for order in orders if order.pk in visible_ids]

    def daily_stats(self, at: Optional[datetime] = None) -> DailyStats:
        local_now = self.establishment.localize(at)
        records = [order.to_record() for order in self._todays_orders(local_now)]
        stats = DashboardVisibilityFilter.daily_stats(records, local_now)
        logger.debug(f"Daily stats for establishment {self.establishment.pk}: {stats}")
        return stats
