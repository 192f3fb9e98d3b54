import logging
from datetime import datetime, time
from typing import Dict, Iterable, Optional

from django.db import transaction

from establishments.models import Establishment

from .availability import Availability, AvailabilityEvaluator
from .exceptions import InvalidWeeklySchedule
from .models import BusinessHours
from .schedule import DaySchedule, WeeklySchedule, minutes_of_day

logger = logging.getLogger(__name__)


# Week given to a newly registered establishment
DEFAULT_OPENING_TIME = time(8, 0)
DEFAULT_CLOSING_TIME = time(18, 0)


def _to_time(value: str, weekday: int) -> time:
    minutes = minutes_of_day(value, weekday)
    return time(minutes // 60, minutes % 60)


class BusinessHoursService:
    """Service class for an establishment's weekly hours and open/closed status"""

    def __init__(self, establishment: Establishment):
        self.establishment = establishment

    @staticmethod
    def schedule_from_rows(rows: Iterable[BusinessHours]) -> WeeklySchedule:
        return WeeklySchedule.from_days(row.to_day_schedule() for row in rows)

    def get_schedule(self) -> WeeklySchedule:
        """Read the stored week. Never cached: hours edits apply immediately."""
        rows = BusinessHours.objects.filter(establishment=self.establishment).order_by('weekday')
        return self.schedule_from_rows(rows)

    def evaluate(self, dt: Optional[datetime] = None) -> Availability:
        """Open/closed at ``dt`` (default: now), judged in the establishment's timezone."""
        local_dt = self.establishment.localize(dt)
        result = AvailabilityEvaluator.evaluate(self.get_schedule(), local_dt)
        for warning in result.warnings:
            logger.warning(f"Establishment {self.establishment.pk} has malformed hours: {warning}")
        return result

    def is_open(self, dt: Optional[datetime] = None) -> bool:
        return self.evaluate(dt).is_open

    def get_next_opening_time(self, dt: Optional[datetime] = None) -> Optional[datetime]:
        local_dt = self.establishment.localize(dt)
        return AvailabilityEvaluator.next_opening(self.get_schedule(), local_dt)

    def get_status_summary(self, dt: Optional[datetime] = None) -> Dict:
        """
        Get status summary for storefront badges and the operator dashboard

        Returns:
            Dict with open flag, local time, timezone, next opening and warnings
        """
        local_dt = self.establishment.localize(dt)
        schedule = self.get_schedule()
        result = AvailabilityEvaluator.evaluate(schedule, local_dt)

        summary = {
            'is_open': result.is_open,
            'current_time': local_dt,
            'timezone': self.establishment.timezone,
            'next_opening': None,
            'warnings': list(result.warnings),
        }
        if not result.is_open:
            summary['next_opening'] = AvailabilityEvaluator.next_opening(schedule, local_dt)
        return summary

    def create_default_week(self) -> WeeklySchedule:
        """
        Open every weekday from 08:00 to 18:00.

        Days that already have hours are left alone, so calling this twice
        is harmless.
        """
        existing = set(
            BusinessHours.objects.filter(establishment=self.establishment).values_list('weekday', flat=True)
        )
        BusinessHours.objects.bulk_create([
            BusinessHours(
                establishment=self.establishment,
                weekday=weekday,
                is_closed=False,
                opening_time=DEFAULT_OPENING_TIME,
                closing_time=DEFAULT_CLOSING_TIME,
            )
            for weekday in range(7)
            if weekday not in existing
        ])
        logger.info(f"Default business hours created for establishment {self.establishment.pk}")
        return self.get_schedule()

    @transaction.atomic
    def replace_week(self, days: Iterable[DaySchedule]) -> WeeklySchedule:
        """
        Store a complete week of hours, replacing whatever was there.

        Raises:
            InvalidWeeklySchedule: Unless exactly one entry per weekday is given.
            MalformedSchedule: If an open day has an unparseable time.
        """
        schedule = WeeklySchedule.from_days(days)
        if not schedule.is_full_week:
            raise InvalidWeeklySchedule("Business hours must list all seven weekdays")

        for day in schedule:
            if day.closed:
                opening = _to_time(day.open_time, day.weekday) if day.open_time else time(0, 0)
                closing = _to_time(day.close_time, day.weekday) if day.close_time else time(0, 0)
            else:
                opening = _to_time(day.open_time, day.weekday)
                closing = _to_time(day.close_time, day.weekday)

            BusinessHours.objects.update_or_create(
                establishment=self.establishment,
                weekday=day.weekday,
                defaults={
                    'is_closed': day.closed,
                    'opening_time': opening,
                    'closing_time': closing,
                },
            )

        logger.info(f"Business hours replaced for establishment {self.establishment.pk}")
        return self.get_schedule()
