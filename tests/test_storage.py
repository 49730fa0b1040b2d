"""Key-value storage adapters."""

import pytest

from bizoe.db.storage import MemoryStorage, ScopedStorage, SqliteStorage
from bizoe.store.cart import CartStore


@pytest.fixture
def sqlite_storage(tmp_path):
    s = SqliteStorage(str(tmp_path / "nested" / "store.db"))
    s.init_db()
    return s


class TestMemoryStorage:
    def test_values_are_copied(self):
        storage = MemoryStorage()
        value = {"items": [1]}
        storage.set("k", value)
        value["items"].append(2)
        assert storage.get("k") == {"items": [1]}

    def test_remove_missing_key(self):
        storage = MemoryStorage()
        storage.remove("nope")
        assert storage.get("nope") is None


class TestSqliteStorage:
    def test_roundtrip_and_overwrite(self, sqlite_storage):
        sqlite_storage.set("cart-storage", {"promo_code": "SAVE15", "name": "列印機"})
        sqlite_storage.set("cart-storage", {"promo_code": None})
        assert sqlite_storage.get("cart-storage") == {"promo_code": None}

    def test_remove(self, sqlite_storage):
        sqlite_storage.set("k", {"a": 1})
        sqlite_storage.remove("k")
        assert sqlite_storage.get("k") is None

    def test_cart_store_on_sqlite(self, sqlite_storage, clock, resin):
        CartStore(sqlite_storage, clock).add_item(resin, 2)
        assert CartStore(sqlite_storage, clock).item_count() == 2


class TestScopedStorage:
    def test_visitors_are_isolated(self, clock, resin):
        backing = MemoryStorage()
        alice = CartStore(ScopedStorage(backing, "alice"), clock)
        bob = CartStore(ScopedStorage(backing, "bob"), clock)

        alice.add_item(resin, 3)

        assert bob.is_empty
        assert backing.keys() == ["alice:cart-storage"]
