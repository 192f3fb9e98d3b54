"""
Catalog management for establishment operators.

Price and availability changes need no cart bookkeeping: carts read the
current catalog on every request. Removing an item does, because carts
holding it lose that line.
"""
import logging

from django.db import transaction

from cart.models import Cart, CartItem

from .models import CatalogItem

logger = logging.getLogger(__name__)


class CatalogService:
    @staticmethod
    def add_item(establishment, **fields) -> CatalogItem:
        item = CatalogItem.objects.create(establishment=establishment, **fields)
        logger.info(f"Catalog item {item.pk} added to establishment {establishment.pk} at {item.price}")
        return item

    @staticmethod
    def update_item(item: CatalogItem, **changes) -> CatalogItem:
        old_price = item.price
        for field, value in changes.items():
            setattr(item, field, value)
        item.save()

        if item.price != old_price:
            logger.info(f"Catalog item {item.pk} price changed: {old_price} -> {item.price}")
        return item

    @staticmethod
    @transaction.atomic
    def remove_item(item: CatalogItem) -> None:
        """
        Delete a catalog item.

        Cart lines holding it go with it; carts left empty are released from
        the establishment. Past orders keep their item snapshots.
        """
        cart_ids = list(CartItem.objects.filter(catalog_item=item).values_list('cart_id', flat=True))
        item_id, establishment_id = item.pk, item.establishment_id
        item.delete()

        released = (
            Cart.objects.filter(pk__in=cart_ids, items__isnull=True).update(establishment=None)
            if cart_ids else 0
        )
        logger.info(
            f"Catalog item {item_id} removed from establishment {establishment_id}; "
            f"{len(cart_ids)} cart line(s) dropped, {released} cart(s) emptied"
        )
