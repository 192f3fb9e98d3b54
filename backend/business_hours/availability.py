"""
Open/closed evaluation for a weekly schedule.

Callers pass a datetime already expressed in the establishment's local
time; see ``Establishment.localize``. Nothing here reads a clock or
caches a result, so the same schedule and instant always yield the
same answer.
"""
import logging
from datetime import datetime, time, timedelta
from typing import NamedTuple, Optional, Tuple

from .exceptions import MalformedSchedule
from .schedule import DaySchedule, WeeklySchedule, weekday_index

logger = logging.getLogger(__name__)


def _localize_like(naive: datetime, reference: datetime) -> datetime:
    """Attach ``reference``'s timezone to a local wall-clock time."""
    tz = reference.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, "localize"):
        # pytz zones pick the offset in effect on that date
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


class Availability(NamedTuple):
    is_open: bool
    warnings: Tuple[str, ...] = ()


def _in_window(minute: int, opening: int, closing: int) -> bool:
    if opening <= closing:
        return opening <= minute <= closing
    # Overnight window, e.g. 22:00-02:00
    return minute >= opening or minute <= closing


class AvailabilityEvaluator:
    """Decides whether an establishment is open at a given local instant."""

    @staticmethod
    def evaluate(schedule: WeeklySchedule, at: datetime) -> Availability:
        """
        Evaluate the schedule at ``at``.

        Rules, in order:
        - today explicitly closed: closed
        - inside today's own window (bounds inclusive): open
        - inside the early-morning tail of yesterday's overnight window: open
        - otherwise closed

        An unparseable time makes the result closed with a warning attached.
        """
        today_index = weekday_index(at)
        today = schedule.for_weekday(today_index)
        minute = at.hour * 60 + at.minute

        if today is not None:
            if today.closed:
                return Availability(False)
            try:
                opening, closing = today.window()
            except MalformedSchedule as e:
                return AvailabilityEvaluator._malformed(e)
            if _in_window(minute, opening, closing):
                return Availability(True)

        yesterday = schedule.for_weekday((today_index - 1) % 7)
        if yesterday is None or yesterday.closed:
            return Availability(False)
        try:
            opening, closing = yesterday.window()
        except MalformedSchedule as e:
            return AvailabilityEvaluator._malformed(e)

        if opening > closing and minute <= closing:
            return Availability(True)
        return Availability(False)

    @staticmethod
    def is_open(schedule: WeeklySchedule, at: datetime) -> bool:
        return AvailabilityEvaluator.evaluate(schedule, at).is_open

    @staticmethod
    def next_opening(schedule: WeeklySchedule, at: datetime) -> Optional[datetime]:
        """
        Start of the next opening window strictly after ``at``.

        Returns None when no day in the coming week opens.
        """
        base_index = weekday_index(at)

        for offset in range(8):
            day: Optional[DaySchedule] = schedule.for_weekday((base_index + offset) % 7)
            if day is None or day.closed:
                continue
            try:
                opening, _ = day.window()
            except MalformedSchedule as e:
                logger.warning(f"Skipping {day.name} while searching next opening: {e}")
                continue

            candidate = datetime.combine(at.date() + timedelta(days=offset), time(opening // 60, opening % 60))
            candidate = _localize_like(candidate, at)
            if candidate > at:
                return candidate
        return None

    @staticmethod
    def _malformed(error: MalformedSchedule) -> Availability:
        logger.warning(f"Treating establishment as closed: {error}")
        return Availability(False, (str(error),))
