"""
Catalog Lookup Tests

DatabaseCatalog feeds cart pricing with current prices and the
establishment's delivery policy.
"""

from decimal import Decimal

import pytest

from cart.aggregator import CartAggregator, CartEntry, CartSnapshot
from cart.exceptions import UnknownCatalogItem
from orders.calculators import DeliveryPolicy, PriceBreakdown
from products.catalog import DatabaseCatalog


@pytest.mark.django_db
class TestDatabaseCatalog:

    def test_entry_carries_current_price(self, dipyrone):
        entry = DatabaseCatalog().get(dipyrone.pk)

        assert entry.unit_price == Decimal('40.00')
        assert entry.establishment_id == dipyrone.establishment_id
        assert entry.name == 'Dipirona (500mg, 20 comprimidos)'

    def test_unavailable_hidden_by_default(self, dipyrone):
        dipyrone.is_available = False
        dipyrone.save()

        assert DatabaseCatalog().get(dipyrone.pk) is None
        assert DatabaseCatalog(include_unavailable=True).get(dipyrone.pk) is not None

    def test_unknown_item(self, db):
        assert DatabaseCatalog().get(999999) is None

    def test_delivery_policy_from_establishment(self, establishment):
        assert DatabaseCatalog().delivery_policy(establishment.pk) == DeliveryPolicy(
            Decimal('10.00'), Decimal('50.00')
        )

    def test_delivery_policy_for_missing_establishment(self, db):
        assert DatabaseCatalog().delivery_policy(999999) == DeliveryPolicy()

    def test_price_change_seen_by_new_lookup(self, dipyrone):
        DatabaseCatalog().get(dipyrone.pk)
        dipyrone.price = Decimal('45.00')
        dipyrone.save()

        assert DatabaseCatalog().get(dipyrone.pk).unit_price == Decimal('45.00')

    def test_prices_a_cart(self, dipyrone, vitamin_c):
        snapshot = CartSnapshot(
            cart_id=1,
            establishment_id=dipyrone.establishment_id,
            entries=(CartEntry(dipyrone.pk, 1), CartEntry(vitamin_c.pk, 2)),
        )
        catalog = DatabaseCatalog().prefetch([dipyrone.pk, vitamin_c.pk])

        assert CartAggregator.price_cart(snapshot, catalog) == PriceBreakdown(
            Decimal('60.00'), Decimal('0.00'), Decimal('60.00')
        )

    def test_missing_item_fails_pricing(self, dipyrone):
        snapshot = CartSnapshot(
            cart_id=1,
            establishment_id=dipyrone.establishment_id,
            entries=(CartEntry(999999, 1),),
        )

        with pytest.raises(UnknownCatalogItem):
            CartAggregator.price_cart(snapshot, DatabaseCatalog())
