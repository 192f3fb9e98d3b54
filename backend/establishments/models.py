from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytz
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from orders.calculators import DeliveryPolicy


class Establishment(models.Model):
    """
    A pharmacy selling through the marketplace.

    Owns its catalog, its weekly business hours and its delivery policy.
    """

    TIMEZONE_CHOICES = [
        ('America/Sao_Paulo', 'Brasília Time'),
        ('America/Bahia', 'Bahia Time'),
        ('America/Fortaleza', 'Fortaleza Time'),
        ('America/Recife', 'Recife Time'),
        ('America/Belem', 'Belém Time'),
        ('America/Manaus', 'Amazon Time'),
        ('America/Cuiaba', 'Cuiabá Time'),
        ('America/Campo_Grande', 'Campo Grande Time'),
        ('America/Porto_Velho', 'Porto Velho Time'),
        ('America/Boa_Vista', 'Boa Vista Time'),
        ('America/Rio_Branco', 'Acre Time'),
        ('America/Noronha', 'Fernando de Noronha Time'),
        ('UTC', 'UTC'),
    ]

    name = models.CharField(_("corporate name"), max_length=200)
    phone = models.CharField(_("contact phone"), max_length=20, blank=True)
    coverage_radius_km = models.DecimalField(
        _("coverage radius (km)"),
        max_digits=6,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    delivery_fee = models.DecimalField(
        _("delivery fee"),
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    free_delivery_threshold = models.DecimalField(
        _("free delivery threshold"),
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text=_("Orders with a subtotal at or above this amount ship free."),
    )
    timezone = models.CharField(
        max_length=50,
        choices=TIMEZONE_CHOICES,
        default='America/Sao_Paulo',
        help_text=_("Business hours are interpreted in this timezone."),
    )
    logo_url = models.URLField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = _("Establishment")
        verbose_name_plural = _("Establishments")

    def __str__(self):
        return self.name

    def delivery_policy(self) -> DeliveryPolicy:
        return DeliveryPolicy(
            fee_amount=self.delivery_fee,
            free_threshold=self.free_delivery_threshold,
        )

    def localize(self, dt: Optional[datetime] = None) -> datetime:
        """Express ``dt`` (default: now) in the establishment's timezone."""
        if dt is None:
            dt = timezone.now()

        business_tz = pytz.timezone(self.timezone)
        if dt.tzinfo is None:
            return business_tz.localize(dt)
        return dt.astimezone(business_tz)


class EstablishmentAddress(models.Model):
    """Where an establishment dispatches deliveries from."""

    establishment = models.ForeignKey(
        Establishment,
        on_delete=models.CASCADE,
        related_name='addresses',
    )
    street = models.CharField(max_length=200)
    number = models.CharField(max_length=20)
    complement = models.CharField(max_length=100, blank=True)
    district = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2)
    postal_code = models.CharField(max_length=9)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']
        verbose_name = _("Establishment address")
        verbose_name_plural = _("Establishment addresses")

    def __str__(self):
        return f"{self.street}, {self.number} - {self.district}, {self.city}/{self.state}"
