"""Shared fixtures: zero-delay settings, in-memory storage, a fixed clock."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from bizoe.config import settings
from bizoe.db import mock_data
from bizoe.db.storage import MemoryStorage
from bizoe.store.models import Product


@pytest.fixture
def cfg(tmp_path):
    return replace(
        settings,
        db_path=str(tmp_path / "store.db"),
        tax_rate=0.08,
        free_shipping_threshold=100.0,
        shipping_fee=9.99,
        default_locale="zh-TW",
        auth_delay=0.0,
        order_delay=0.0,
        account_delay=0.0,
        mock_failure_rate=0.0,
    )


@pytest.fixture
def storage():
    return MemoryStorage()


class FakeClock:
    """Advances one second per call so updated_at always moves."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def printer() -> Product:
    """Phrozen Sonic Mighty Revo 16K, 899.99, 15 in stock."""
    return mock_data.find_product("1")


@pytest.fixture
def resin() -> Product:
    """Phrozen resin, 29.99, 50 in stock."""
    return mock_data.find_product("5")


@pytest.fixture
def make_product():
    def _make(id="x1", price=10.0, stock_quantity=5, **kw) -> Product:
        defaults = dict(
            name=f"Product {id}",
            description="test product",
            currency="USD",
            category_id="1",
            category="3D 列印機",
            brand="Test",
        )
        defaults.update(kw)
        return Product(id=id, price=price, stock_quantity=stock_quantity, in_stock=stock_quantity > 0, **defaults)

    return _make
