"""
Cart service layer.

This service handles:
- Cart retrieval (one cart per client)
- Adding/updating/removing items under the single-establishment rule
- Pricing the cart from current catalog prices
"""
import logging
from typing import Optional

from django.db import transaction

from orders.calculators import PriceBreakdown
from products.catalog import DatabaseCatalog
from products.models import CatalogItem

from .aggregator import CartAggregator
from .exceptions import CartEstablishmentMismatch, UnknownCatalogItem
from .models import Cart, CartItem

logger = logging.getLogger(__name__)


class CartService:
    """Service for managing cart operations."""

    @staticmethod
    def get_or_create_cart(client) -> Cart:
        cart, created = Cart.objects.get_or_create(client=client)
        if created:
            logger.info(f"Created new cart {cart.pk} for client {client.pk}")
        return cart

    @staticmethod
    @transaction.atomic
    def add_item(cart: Cart, catalog_item: CatalogItem, quantity: int = 1) -> CartItem:
        """
        Add an item to the cart, merging with an existing line for the same item.

        Raises:
            UnknownCatalogItem: If the item is not currently sold.
            CartEstablishmentMismatch: If the cart holds items from another establishment.
        """
        if not catalog_item.is_available:
            raise UnknownCatalogItem(catalog_item.pk)

        cart = Cart.objects.select_for_update().get(pk=cart.pk)
        has_items = cart.items.exists()
        if has_items and cart.establishment_id != catalog_item.establishment_id:
            raise CartEstablishmentMismatch(cart.establishment_id, catalog_item.establishment_id)

        cart_item, created = CartItem.objects.get_or_create(
            cart=cart,
            catalog_item=catalog_item,
            defaults={'quantity': quantity},
        )
        if not created:
            cart_item.quantity += quantity
            cart_item.save(update_fields=['quantity'])

        cart.establishment_id = catalog_item.establishment_id
        cart.touch()

        logger.info(f"Cart {cart.pk}: {quantity} x catalog item {catalog_item.pk}")
        return cart_item

    @staticmethod
    @transaction.atomic
    def update_item_quantity(cart_item: CartItem, new_quantity: int) -> Optional[CartItem]:
        """
        Set the quantity of a cart item. A quantity below 1 removes the item.

        Returns:
            The updated item, or None if it was removed.
        """
        if new_quantity < 1:
            CartService.remove_item(cart_item)
            return None

        cart_item.quantity = new_quantity
        cart_item.save(update_fields=['quantity'])
        cart_item.cart.touch()
        return cart_item

    @staticmethod
    @transaction.atomic
    def remove_item(cart_item: CartItem):
        cart = cart_item.cart
        cart_item.delete()
        if not cart.items.exists():
            cart.establishment = None
        cart.touch()

    @staticmethod
    @transaction.atomic
    def clear_cart(cart: Cart):
        cart.items.all().delete()
        cart.establishment = None
        cart.touch()

    @staticmethod
    def get_totals(cart: Cart, catalog: Optional[DatabaseCatalog] = None) -> PriceBreakdown:
        """
        Price the cart with current catalog prices and the establishment's delivery policy.

        Items that went out of stock are still priced for display; checkout
        passes a strict catalog and rejects them.
        """
        snapshot = cart.to_snapshot()
        if catalog is None:
            catalog = DatabaseCatalog(include_unavailable=True)
        catalog.prefetch(entry.catalog_item_id for entry in snapshot.entries)
        return CartAggregator.price_cart(snapshot, catalog)
