from django.conf import settings
from django.db import models
from django.utils import timezone

from .aggregator import CartEntry, CartSnapshot


class Cart(models.Model):
    """
    A client's open cart. One per client, reused after each checkout.

    Key Design:
    - establishment is set by the first item and cleared when the cart empties;
      every item in the cart belongs to it
    - NO prices or totals stored: they are read from the catalog on every
      request (see cart.aggregator)
    """

    client = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='cart',
    )
    establishment = models.ForeignKey(
        'establishments.Establishment',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='carts',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_activity = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"Cart of {self.client}"

    def touch(self):
        self.last_activity = timezone.now()
        self.save(update_fields=['last_activity', 'establishment', 'updated_at'])

    @property
    def is_empty(self):
        return not self.items.exists()

    def to_snapshot(self) -> CartSnapshot:
        return CartSnapshot(
            cart_id=self.pk,
            establishment_id=self.establishment_id,
            entries=tuple(
                CartEntry(catalog_item_id=item.catalog_item_id, quantity=item.quantity, item_id=item.pk)
                for item in self.items.all()
            ),
        )


class CartItem(models.Model):
    cart = models.ForeignKey(Cart, on_delete=models.CASCADE, related_name='items')
    catalog_item = models.ForeignKey(
        'products.CatalogItem',
        on_delete=models.CASCADE,
        related_name='cart_items',
    )
    quantity = models.PositiveIntegerField(default=1)
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['added_at', 'id']
        constraints = [
            models.UniqueConstraint(fields=['cart', 'catalog_item'], name='unique_catalog_item_per_cart'),
        ]

    def __str__(self):
        return f"{self.quantity} x {self.catalog_item}"
