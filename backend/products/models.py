from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class CatalogItem(models.Model):
    """A product offered by one establishment at that establishment's price."""

    establishment = models.ForeignKey(
        'establishments.Establishment',
        on_delete=models.CASCADE,
        related_name='catalog_items',
    )
    name = models.CharField(max_length=200, help_text=_("Commercial name of the product."))
    presentation = models.CharField(
        max_length=200, blank=True, help_text=_("Dosage and packaging, e.g. '500mg, 20 tablets'.")
    )
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text=_("Current selling price at this establishment."),
    )
    is_available = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['establishment', 'is_available'], name='catalog_estab_avail_idx'),
        ]

    def __str__(self):
        if self.presentation:
            return f"{self.name} ({self.presentation})"
        return self.name
