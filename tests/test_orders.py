"""Mock order service: placing orders, history, status filter."""

import logging

import pytest

from bizoe.errors import EmptyCart, FormValidationError
from bizoe.services.orders import MockOrderService, make_order_number
from bizoe.store.cart import CartStore
from bizoe.store.models import Address, User

ADDRESS = Address(
    first_name="小明",
    last_name="王",
    email="ming@example.com",
    phone="0912345678",
    address="信義路五段7號",
    city="台北市",
    state="信義區",
    zip_code="110",
)


@pytest.fixture
def user():
    return User(id="u1", email="ming@example.com", first_name="小明", last_name="王", created_at="", updated_at="")


@pytest.fixture
def service(cfg):
    return MockOrderService(cfg=cfg)


class TestPlaceOrder:
    async def test_order_totals_follow_cart(self, service, user, storage, clock, cfg, resin, printer):
        cart = CartStore(storage, clock, cfg)
        cart.add_item(resin, 2)
        cart.add_item(printer, 1)
        cart.apply_promo("WELCOME10")

        order = await service.place_order(user, cart.items, ADDRESS, "credit_card", cart.promo_code)

        assert order.order_number.startswith("BIZOE-")
        assert len(order.order_number) == len("BIZOE-") + 6
        assert order.subtotal == pytest.approx(959.97)
        assert order.discount == pytest.approx(95.997)
        assert order.total == pytest.approx(959.97 + 959.97 * 0.08 - 95.997)
        assert order.item_count == 3
        assert order.status == "confirmed"
        assert order.shipping_address == ADDRESS

    async def test_empty_cart_rejected(self, service, user):
        with pytest.raises(EmptyCart):
            await service.place_order(user, [], ADDRESS, "paypal")

    async def test_payment_method_checked(self, service, user, storage, clock, resin):
        cart = CartStore(storage, clock)
        cart.add_item(resin, 1)
        with pytest.raises(FormValidationError):
            await service.place_order(user, cart.items, ADDRESS, "bitcoin")

    async def test_client_price_drift_is_logged(self, service, user, storage, clock, make_product, caplog):
        cart = CartStore(storage, clock)
        cart.add_item(make_product(id="5", price=1.0), 1)
        with caplog.at_level(logging.WARNING, logger="bizoe.services.orders"):
            order = await service.place_order(user, cart.items, ADDRESS, "apple_pay")
        assert order.subtotal == pytest.approx(1.0)
        assert "unverified client prices" in caplog.text


class TestHistory:
    def test_seeded_orders(self, service):
        orders = service.list_orders("u1")
        assert [o.order_number for o in orders] == [
            "BIZOE-20240115-001",
            "BIZOE-20240110-002",
            "BIZOE-20240105-003",
        ]
        assert all(o.total > 0 for o in orders)

    async def test_placed_orders_come_first(self, service, user, storage, clock, resin):
        cart = CartStore(storage, clock)
        cart.add_item(resin, 1)
        order = await service.place_order(user, cart.items, ADDRESS, "paypal")

        assert service.list_orders(user.id)[0] == order
        assert service.get_order(user.id, order.order_number) == order
        assert service.list_orders("someone-else")[0].order_number == "BIZOE-20240115-001"

    def test_status_filter_and_counts(self, service):
        shipped = service.list_orders("u1", "shipped")
        assert [o.status for o in shipped] == ["shipped"]
        assert service.list_orders("u1", "bogus") == service.list_orders("u1")

        counts = service.status_counts("u1")
        assert counts["delivered"] == counts["shipped"] == counts["processing"] == 1
        assert counts["cancelled"] == 0

    def test_unknown_order(self, service):
        assert service.get_order("u1", "BIZOE-000000") is None


def test_order_number_uses_last_six_timestamp_digits():
    from datetime import datetime, timezone

    now = datetime.fromtimestamp(1705312800.123456, tz=timezone.utc)
    assert make_order_number(now) == "BIZOE-800123"
