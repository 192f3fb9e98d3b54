"""
Turns stored cart entries into priced lines.

Prices are read from the catalog when the cart is priced, not when an item
was added, so a price change at the establishment shows up in every open
cart on the next read.
"""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, List, Optional, Protocol, Tuple

from orders.calculators import CartLine, DeliveryPolicy, PriceBreakdown, PricingCalculator

from .exceptions import CartEstablishmentMismatch, UnknownCatalogItem


@dataclass(frozen=True)
class CartEntry:
    catalog_item_id: int
    quantity: int
    item_id: Optional[int] = None


@dataclass(frozen=True)
class CartSnapshot:
    """Immutable view of a cart; restoring an old snapshot restores its totals."""

    cart_id: Optional[int]
    establishment_id: Optional[int]
    entries: Tuple[CartEntry, ...] = field(default_factory=tuple)

    def entry_for(self, catalog_item_id: int) -> Optional[CartEntry]:
        for entry in self.entries:
            if entry.catalog_item_id == catalog_item_id:
                return entry
        return None

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class CatalogEntry:
    catalog_item_id: int
    unit_price: Decimal
    establishment_id: int
    name: str = ""


class CatalogLookup(Protocol):
    def get(self, catalog_item_id: int) -> Optional[CatalogEntry]:
        ...

    def delivery_policy(self, establishment_id: int) -> DeliveryPolicy:
        ...


class MappingCatalog:
    """CatalogLookup over in-memory dictionaries."""

    def __init__(self, entries=(), policies: Optional[Dict[int, DeliveryPolicy]] = None):
        self._entries = {entry.catalog_item_id: entry for entry in entries}
        self._policies = dict(policies or {})

    def get(self, catalog_item_id):
        return self._entries.get(catalog_item_id)

    def delivery_policy(self, establishment_id):
        return self._policies.get(establishment_id, DeliveryPolicy())


class CartAggregator:

    @staticmethod
    def to_line_items(cart: CartSnapshot, catalog: CatalogLookup) -> List[CartLine]:
        """
        Resolve each entry's current price from ``catalog``.

        Entries with quantity below 1 are pending removals and are skipped.

        Raises:
            UnknownCatalogItem: If an entry's item is missing from the catalog.
            CartEstablishmentMismatch: If an item belongs to another establishment.
        """
        lines = []
        for entry in cart.entries:
            if entry.quantity < 1:
                continue

            item = catalog.get(entry.catalog_item_id)
            if item is None:
                raise UnknownCatalogItem(entry.catalog_item_id)
            if cart.establishment_id is not None and item.establishment_id != cart.establishment_id:
                raise CartEstablishmentMismatch(cart.establishment_id, item.establishment_id)

            lines.append(CartLine(
                catalog_item_id=item.catalog_item_id,
                unit_price=item.unit_price,
                quantity=entry.quantity,
                establishment_id=item.establishment_id,
                name=item.name,
            ))
        return lines

    @staticmethod
    def price_cart(cart: CartSnapshot, catalog: CatalogLookup) -> PriceBreakdown:
        lines = CartAggregator.to_line_items(cart, catalog)
        if cart.establishment_id is not None:
            policy = catalog.delivery_policy(cart.establishment_id)
        else:
            policy = DeliveryPolicy()
        return PricingCalculator.compute_totals(lines, policy)

    @staticmethod
    def with_quantity(cart: CartSnapshot, catalog_item_id: int, quantity: int) -> CartSnapshot:
        """
        Copy of ``cart`` with one entry's quantity changed.

        A quantity below 1 removes the entry; an empty result also forgets the
        establishment so the next item can come from any store.
        """
        entries = []
        for entry in cart.entries:
            if entry.catalog_item_id != catalog_item_id:
                entries.append(entry)
            elif quantity >= 1:
                entries.append(replace(entry, quantity=quantity))

        establishment_id = cart.establishment_id if entries else None
        return replace(cart, entries=tuple(entries), establishment_id=establishment_id)
