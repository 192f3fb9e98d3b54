"""
Cart Aggregator Tests

Pricing cart entries from the current catalog and local quantity edits.
"""

from decimal import Decimal

import pytest

from cart.aggregator import CartAggregator, CartEntry, CartSnapshot, CatalogEntry, MappingCatalog
from cart.exceptions import CartEstablishmentMismatch, UnknownCatalogItem
from orders.calculators import DeliveryPolicy, PriceBreakdown

pytestmark = pytest.mark.unit

STORE = 1


def catalog(dipyrone_price="40.00", policy=None):
    return MappingCatalog(
        [
            CatalogEntry(10, Decimal(dipyrone_price), STORE, "Dipirona"),
            CatalogEntry(11, Decimal("10.00"), STORE, "Vitamina C"),
            CatalogEntry(20, Decimal("59.90"), 2, "Protetor Solar"),
        ],
        {STORE: policy or DeliveryPolicy(Decimal("10.00"), Decimal("50.00"))},
    )


CART = CartSnapshot(
    cart_id=1,
    establishment_id=STORE,
    entries=(CartEntry(10, 1, item_id=100), CartEntry(11, 2, item_id=101)),
)


class TestToLineItems:
    """Test resolving entries into priced lines"""

    def test_lines_use_catalog_prices(self):
        lines = CartAggregator.to_line_items(CART, catalog())

        assert [(l.catalog_item_id, l.unit_price, l.quantity) for l in lines] == [
            (10, Decimal("40.00"), 1),
            (11, Decimal("10.00"), 2),
        ]
        assert lines[0].name == "Dipirona"

    def test_price_change_shows_on_next_read(self):
        before = CartAggregator.price_cart(CART, catalog())
        after = CartAggregator.price_cart(CART, catalog(dipyrone_price="45.00"))

        assert before.subtotal == Decimal("60.00")
        assert after.subtotal == Decimal("65.00")

    def test_zero_quantity_entries_skipped(self):
        cart = CartSnapshot(1, STORE, (CartEntry(10, 0), CartEntry(11, 1)))
        lines = CartAggregator.to_line_items(cart, catalog())
        assert [l.catalog_item_id for l in lines] == [11]

    def test_unknown_item(self):
        cart = CartSnapshot(1, STORE, (CartEntry(99, 1),))
        with pytest.raises(UnknownCatalogItem) as exc_info:
            CartAggregator.to_line_items(cart, catalog())
        assert exc_info.value.catalog_item_id == 99

    def test_item_from_other_establishment(self):
        cart = CartSnapshot(1, STORE, (CartEntry(10, 1), CartEntry(20, 1)))
        with pytest.raises(CartEstablishmentMismatch):
            CartAggregator.to_line_items(cart, catalog())


class TestPriceCart:
    """Test end-to-end cart pricing"""

    def test_free_delivery(self):
        assert CartAggregator.price_cart(CART, catalog()) == PriceBreakdown(
            Decimal("60.00"), Decimal("0.00"), Decimal("60.00")
        )

    def test_delivery_fee_below_threshold(self):
        policy = DeliveryPolicy(Decimal("10.00"), Decimal("100.00"))
        assert CartAggregator.price_cart(CART, catalog(policy=policy)).total == Decimal("70.00")

    def test_empty_unbound_cart(self):
        empty = CartSnapshot(1, None, ())
        assert CartAggregator.price_cart(empty, catalog()) == PriceBreakdown(
            Decimal("0.00"), Decimal("0.00"), Decimal("0.00")
        )


class TestWithQuantity:
    """Test local quantity edits"""

    def test_changes_one_entry(self):
        updated = CartAggregator.with_quantity(CART, 11, 5)

        assert updated.entry_for(11).quantity == 5
        assert updated.entry_for(11).item_id == 101
        assert updated.entry_for(10) == CART.entry_for(10)
        assert CART.entry_for(11).quantity == 2

    def test_below_one_removes_entry(self):
        updated = CartAggregator.with_quantity(CART, 10, 0)

        assert updated.entry_for(10) is None
        assert updated.establishment_id == STORE

    def test_removing_last_entry_unbinds_establishment(self):
        single = CartSnapshot(1, STORE, (CartEntry(10, 1),))

        updated = CartAggregator.with_quantity(single, 10, -1)

        assert updated.is_empty
        assert updated.establishment_id is None

    def test_restoring_previous_snapshot_restores_totals(self):
        before = CartAggregator.price_cart(CART, catalog())
        changed = CartAggregator.with_quantity(CART, 11, 7)

        assert CartAggregator.price_cart(changed, catalog()) != before
        assert CartAggregator.price_cart(CART, catalog()) == before
