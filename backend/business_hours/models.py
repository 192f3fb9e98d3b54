from datetime import time

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from .schedule import DaySchedule, WEEKDAY_NAMES


class BusinessHours(models.Model):
    """Opening hours of an establishment for one weekday."""

    WEEKDAY_CHOICES = [(index, _(name)) for index, name in enumerate(WEEKDAY_NAMES)]

    establishment = models.ForeignKey(
        'establishments.Establishment',
        on_delete=models.CASCADE,
        related_name='business_hours',
    )
    weekday = models.PositiveSmallIntegerField(
        choices=WEEKDAY_CHOICES,
        validators=[MinValueValidator(0), MaxValueValidator(6)],
        help_text=_("0 = Sunday ... 6 = Saturday"),
    )
    is_closed = models.BooleanField(default=False)
    opening_time = models.TimeField(default=time(0, 0))
    closing_time = models.TimeField(
        default=time(0, 0),
        help_text=_("May be earlier than the opening time for windows that cross midnight."),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['establishment', 'weekday']
        constraints = [
            models.UniqueConstraint(
                fields=['establishment', 'weekday'],
                name='unique_business_hours_per_weekday',
            ),
        ]
        verbose_name = _("Business hours")
        verbose_name_plural = _("Business hours")

    def __str__(self):
        day = self.get_weekday_display()
        if self.is_closed:
            return f"{self.establishment} - {day}: Closed"
        return f"{self.establishment} - {day}: {self.opening_time:%H:%M}-{self.closing_time:%H:%M}"

    def to_day_schedule(self) -> DaySchedule:
        return DaySchedule(
            weekday=self.weekday,
            closed=self.is_closed,
            open_time=self.opening_time.strftime('%H:%M'),
            close_time=self.closing_time.strftime('%H:%M'),
        )
