"""
Weekly schedule value objects.

Weekdays are numbered 0-6 starting on Sunday, matching how the storefront
and the establishment dashboard number them. Times are "HH:MM" strings in
the establishment's local time; "HH:MM:SS" is accepted and the seconds are
ignored.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional, Tuple

from .exceptions import InvalidWeeklySchedule, MalformedSchedule

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


def weekday_index(moment: datetime) -> int:
    """Sunday-based weekday (0-6) for a datetime. Python counts from Monday."""
    return (moment.weekday() + 1) % 7


def minutes_of_day(value, weekday=None) -> int:
    """
    Parse "HH:MM" (or "HH:MM:SS") into minutes after midnight.

    Raises:
        MalformedSchedule: If the value is not a valid wall-clock time.
    """
    if not isinstance(value, str):
        raise MalformedSchedule(weekday, value)

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise MalformedSchedule(weekday, value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise MalformedSchedule(weekday, value)

    return hours * 60 + minutes


@dataclass(frozen=True)
class DaySchedule:
    """Opening window for one weekday."""

    weekday: int
    closed: bool = False
    open_time: str = "00:00"
    close_time: str = "00:00"

    def __post_init__(self):
        if not isinstance(self.weekday, int) or not SUNDAY <= self.weekday <= SATURDAY:
            raise InvalidWeeklySchedule(f"Weekday must be between 0 and 6, got {self.weekday!r}")

    @property
    def name(self) -> str:
        return WEEKDAY_NAMES[self.weekday]

    def window(self) -> Tuple[int, int]:
        """(opening, closing) in minutes after midnight."""
        return (
            minutes_of_day(self.open_time, self.weekday),
            minutes_of_day(self.close_time, self.weekday),
        )


@dataclass(frozen=True)
class WeeklySchedule:
    """
    At most one DaySchedule per weekday.

    A schedule with no entries has not been configured yet and is always
    closed. Entries are kept sorted by weekday.
    """

    days: Tuple[DaySchedule, ...] = field(default_factory=tuple)

    def __post_init__(self):
        days = tuple(sorted(self.days, key=lambda day: day.weekday))
        seen = set()
        for day in days:
            if day.weekday in seen:
                raise InvalidWeeklySchedule(
                    f"{WEEKDAY_NAMES[day.weekday]} appears more than once in the schedule"
                )
            seen.add(day.weekday)
        object.__setattr__(self, "days", days)

    @classmethod
    def from_days(cls, days: Iterable[DaySchedule]) -> "WeeklySchedule":
        return cls(tuple(days))

    def for_weekday(self, weekday: int) -> Optional[DaySchedule]:
        for day in self.days:
            if day.weekday == weekday:
                return day
        return None

    @property
    def is_configured(self) -> bool:
        return bool(self.days)

    @property
    def is_full_week(self) -> bool:
        return len(self.days) == 7

    def __iter__(self) -> Iterator[DaySchedule]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)
