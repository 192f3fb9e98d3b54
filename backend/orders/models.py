from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from payments.money import quantize

from .domain import OrderItemRecord, OrderRecord
from .status import OrderStatus, OrderStatusMachine


class Order(models.Model):
    """
    A client's order at one establishment.

    Items and prices are copied from the cart at checkout, so later catalog
    changes never alter a placed order.
    """

    OrderStatus = OrderStatus

    establishment = models.ForeignKey(
        'establishments.Establishment',
        on_delete=models.PROTECT,
        related_name='orders',
    )
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders',
    )
    address = models.ForeignKey(
        'users.Address',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
    )
    payment_method = models.ForeignKey(
        'payments.PaymentMethod',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='orders',
    )
    status = models.CharField(
        max_length=30,
        choices=OrderStatus.choices,
        default=OrderStatus.AWAITING_PAYMENT,
        db_index=True,
    )
    notes = models.TextField(blank=True)

    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    placed_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-placed_at']
        indexes = [
            models.Index(fields=['establishment', 'placed_at'], name='orders_estab_placed_idx'),
            models.Index(fields=['establishment', 'status'], name='orders_estab_status_idx'),
            models.Index(fields=['client', 'placed_at'], name='orders_client_placed_idx'),
        ]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")

    def __str__(self):
        return f"Order #{self.pk} ({self.status})"

    def to_record(self) -> OrderRecord:
        return OrderRecord(
            order_id=self.pk,
            establishment_id=self.establishment_id,
            client_id=self.client_id,
            status=OrderStatusMachine.decode_status(self.status),
            placed_at=self.placed_at,
            last_updated_at=self.updated_at,
            total=self.total,
            subtotal=self.subtotal,
            delivery_fee=self.delivery_fee,
            items=tuple(item.to_record() for item in self.items.all()),
        )


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    catalog_item = models.ForeignKey(
        'products.CatalogItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
    )
    # Snapshot of the catalog item at checkout
    name = models.CharField(max_length=200)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def total_price(self) -> Decimal:
        return quantize(self.unit_price * self.quantity)

    def to_record(self) -> OrderItemRecord:
        return OrderItemRecord(
            catalog_item_id=self.catalog_item_id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=self.quantity,
        )
