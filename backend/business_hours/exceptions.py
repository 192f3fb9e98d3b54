"""
Business hours exceptions.
"""


class BusinessHoursError(Exception):
    """Base exception for schedule problems."""

    code = "business_hours_error"


class MalformedSchedule(BusinessHoursError):
    """A stored opening or closing time could not be parsed.

    Never reaches an API client: the evaluator logs it and reports the
    establishment as closed.
    """

    code = "malformed_schedule"

    def __init__(self, weekday, value, message=None):
        self.weekday = weekday
        self.value = value
        if message is None:
            message = f"Unparseable time {value!r} for weekday {weekday}"
        super().__init__(message)


class InvalidWeeklySchedule(BusinessHoursError):
    """A week of hours is structurally invalid (bad weekday, duplicates, gaps)."""

    code = "invalid_weekly_schedule"
