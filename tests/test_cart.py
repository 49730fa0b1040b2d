"""Cart reducers and the persisted CartStore."""

import random

import pytest

from bizoe.constants import CART_STORAGE_KEY
from bizoe.db import mock_data
from bizoe.db.storage import MemoryStorage
from bizoe.errors import InvalidPromoCode
from bizoe.store import cart as reducers
from bizoe.store.cart import CartStore


def _expected_total(store):
    return sum(it.price * it.quantity for it in store.items)


class TestReducers:
    def test_add_to_missing_cart_creates_one(self, clock, printer):
        cart = reducers.add_item(None, printer, 1, clock())
        assert len(cart.items) == 1
        assert cart.total_items == 1
        assert cart.total_amount == pytest.approx(899.99)
        assert cart.created_at

    def test_add_rejects_non_positive_quantity(self, clock, printer):
        with pytest.raises(ValueError):
            reducers.add_item(None, printer, 0, clock())

    def test_remove_and_update_on_missing_cart(self, clock):
        assert reducers.remove_item(None, "1", clock()) is None
        assert reducers.update_quantity(None, "1", 3, clock()) is None

    def test_reducers_do_not_mutate_input(self, clock, printer, resin):
        cart = reducers.add_item(None, printer, 1, clock())
        reducers.add_item(cart, resin, 2, clock())
        assert len(cart.items) == 1


class TestCartStore:
    def test_add_same_product_twice_merges(self, storage, clock, resin):
        store = CartStore(storage, clock)
        store.add_item(resin, 1)
        store.add_item(resin, 2)

        assert len(store.items) == 1
        assert store.items[0].quantity == 3
        assert store.item_count() == 3

    def test_update_to_zero_is_remove(self, storage, clock, resin, printer):
        a = CartStore(MemoryStorage(), clock)
        b = CartStore(MemoryStorage(), clock)
        for s in (a, b):
            s.add_item(resin, 2)
            s.add_item(printer, 1)

        a.update_quantity(resin.id, 0)
        b.remove_item(resin.id)

        assert [it.product_id for it in a.items] == [it.product_id for it in b.items] == [printer.id]
        assert a.total() == b.total()

    def test_negative_quantity_removes(self, storage, clock, resin):
        store = CartStore(storage, clock)
        store.add_item(resin, 2)
        store.update_quantity(resin.id, -1)
        assert store.is_empty
        assert store.item_count() == 0

    def test_price_snapshot_survives_catalog_change(self, storage, clock, make_product):
        store = CartStore(storage, clock)
        store.add_item(make_product(price=10.0), 1)
        # same id, new catalog price
        store.add_item(make_product(price=50.0), 1)

        assert store.items[0].price == 10.0
        assert store.total() == pytest.approx(20.0)

    def test_totals_match_items_after_random_mutations(self, storage, clock):
        rng = random.Random(7)
        store = CartStore(storage, clock)
        products = mock_data.PRODUCTS[:6]
        for _ in range(200):
            p = rng.choice(products)
            op = rng.choice(["add", "remove", "update"])
            if op == "add":
                store.add_item(p, rng.randint(1, 4))
            elif op == "remove":
                store.remove_item(p.id)
            else:
                store.update_quantity(p.id, rng.randint(-2, 6))

            assert store.total() == pytest.approx(_expected_total(store))
            assert store.item_count() == sum(it.quantity for it in store.items)
            assert all(it.quantity >= 1 for it in store.items)
            assert len({it.product_id for it in store.items}) == len(store.items)

    def test_every_mutation_bumps_updated_at(self, storage, clock, resin):
        store = CartStore(storage, clock)
        store.add_item(resin, 1)
        first = store.cart.updated_at
        store.update_quantity(resin.id, 3)
        assert store.cart.updated_at > first
        assert store.cart.created_at < store.cart.updated_at

    def test_clear_drops_cart_and_promo(self, storage, clock, resin):
        store = CartStore(storage, clock)
        store.add_item(resin, 1)
        store.apply_promo("welcome10")
        store.clear_cart()

        assert store.cart is None
        assert store.promo_code is None
        assert store.total() == 0.0

    def test_state_persists_across_instances(self, storage, clock, resin, printer):
        store = CartStore(storage, clock)
        store.add_item(resin, 2)
        store.add_item(printer, 1)
        store.apply_promo("Save15")

        again = CartStore(storage, clock)
        assert [it.product_id for it in again.items] == [resin.id, printer.id]
        assert again.promo_code == "SAVE15"
        assert again.total() == pytest.approx(29.99 * 2 + 899.99)
        assert set(storage.get(CART_STORAGE_KEY)) == {"cart", "promo_code"}

    def test_unreadable_snapshot_starts_empty(self, storage, clock):
        storage.set(CART_STORAGE_KEY, {"cart": {"items": [{"bogus": 1}]}})
        store = CartStore(storage, clock)
        assert store.is_empty

    def test_invalid_promo_is_not_stored(self, storage, clock, resin):
        store = CartStore(storage, clock)
        store.add_item(resin, 1)
        with pytest.raises(InvalidPromoCode):
            store.apply_promo("NOPE")
        assert store.promo_code is None

    def test_totals_use_promo(self, storage, clock, cfg, printer):
        store = CartStore(storage, clock, cfg)
        store.add_item(printer, 1)
        store.apply_promo("BIZOE2024")
        totals = store.totals()
        assert totals.discount == pytest.approx(899.99 * 0.25)
