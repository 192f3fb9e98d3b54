from django.db import models
from django.utils.translation import gettext_lazy as _


class PaymentMethod(models.Model):
    """
    A way of paying that a client can pick at checkout.

    Only the selection is recorded on the order; no payment is processed.
    """

    name = models.CharField(_("name"), max_length=100, unique=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name
