"""
Database-backed catalog lookup for cart pricing.
"""
from typing import Dict, Iterable, Optional

from cart.aggregator import CatalogEntry
from establishments.models import Establishment
from orders.calculators import DeliveryPolicy

from .models import CatalogItem


class DatabaseCatalog:
    """
    Resolves catalog items and delivery policies from the database.

    Lookups are memoized per instance; create one per request so prices are
    always current.
    """

    def __init__(self, include_unavailable: bool = False):
        self.include_unavailable = include_unavailable
        self._entries: Dict[int, Optional[CatalogEntry]] = {}
        self._policies: Dict[int, DeliveryPolicy] = {}

    def _queryset(self):
        queryset = CatalogItem.objects.all()
        if not self.include_unavailable:
            queryset = queryset.filter(is_available=True)
        return queryset

    @staticmethod
    def _to_entry(item: CatalogItem) -> CatalogEntry:
        return CatalogEntry(
            catalog_item_id=item.pk,
            unit_price=item.price,
            establishment_id=item.establishment_id,
            name=str(item),
        )

    def prefetch(self, catalog_item_ids: Iterable[int]) -> "DatabaseCatalog":
        """Load several items in one query."""
        ids = [pk for pk in catalog_item_ids if pk not in self._entries]
        if ids:
            found = {item.pk: item for item in self._queryset().filter(pk__in=ids)}
            for pk in ids:
                item = found.get(pk)
                self._entries[pk] = self._to_entry(item) if item is not None else None
        return self

    def get(self, catalog_item_id: int) -> Optional[CatalogEntry]:
        if catalog_item_id not in self._entries:
            self.prefetch([catalog_item_id])
        return self._entries[catalog_item_id]

    def delivery_policy(self, establishment_id: int) -> DeliveryPolicy:
        if establishment_id not in self._policies:
            establishment = Establishment.objects.filter(pk=establishment_id).first()
            self._policies[establishment_id] = (
                establishment.delivery_policy() if establishment is not None else DeliveryPolicy()
            )
        return self._policies[establishment_id]
