"""
Custom exceptions for cart operations.
"""


class CartError(Exception):
    """Base exception for cart-related errors."""

    code = "cart_error"


class CartEstablishmentMismatch(CartError):
    """Raised when an item from another establishment is added to a non-empty cart."""

    code = "cart_establishment_mismatch"

    def __init__(self, cart_establishment_id, item_establishment_id, message=None):
        self.cart_establishment_id = cart_establishment_id
        self.item_establishment_id = item_establishment_id
        if message is None:
            message = (
                "The cart already holds items from another establishment. "
                "Finish or clear the current cart before adding this item."
            )
        super().__init__(message)


class UnknownCatalogItem(CartError):
    """Raised when a cart entry references a catalog item that no longer exists."""

    code = "unknown_catalog_item"

    def __init__(self, catalog_item_id, message=None):
        self.catalog_item_id = catalog_item_id
        if message is None:
            message = f"Catalog item {catalog_item_id} is not available"
        super().__init__(message)


class EmptyCartError(CartError):
    """Raised when checking out a cart with no items."""

    code = "empty_cart"

    def __init__(self, message="Cannot place an order from an empty cart"):
        super().__init__(message)
