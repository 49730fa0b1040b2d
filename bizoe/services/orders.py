from __future__ import annotations

import logging
import random
from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Protocol

from bizoe.config import Settings, settings
from bizoe.constants import ORDER_PREFIX, ORDER_STATUSES
from bizoe.db import mock_data
from bizoe.errors import EmptyCart
from bizoe.services.mock import MockService
from bizoe.services.pricing import compute_totals
from bizoe.store.models import Address, CartItem, Order, OrderItem, User
from bizoe.utils.validators import require_valid, validate_payment_choice

logger = logging.getLogger(__name__)


class OrderService(Protocol):
    async def place_order(
        self,
        user: User,
        items: List[CartItem],
        address: Address,
        payment_method: str,
        promo_code: Optional[str] = None,
    ) -> Order: ...

    def list_orders(self, user_id: str, status: str = "") -> List[Order]: ...

    def status_counts(self, user_id: str) -> Dict[str, int]: ...

    def get_order(self, user_id: str, order_number: str) -> Optional[Order]: ...


def make_order_number(now: datetime) -> str:
    return ORDER_PREFIX + str(int(now.timestamp() * 1000))[-6:]


def price_drift(items: Iterable[CartItem]) -> List[str]:
    """Product ids whose captured cart price differs from the catalog price."""
    out = []
    for it in items:
        current = mock_data.find_product(it.product_id)
        if current is None or current.price != it.price:
            out.append(it.product_id)
    return out


def _seed_orders(user_id: str, cfg: Settings) -> List[Order]:
    orders = []
    for i, row in enumerate(mock_data.SEED_ORDERS, start=1):
        items = []
        for product_id, qty in row["items"]:
            p = mock_data.find_product(product_id)
            if p is None:
                continue
            items.append(OrderItem(p.id, p.name, p.images[0] if p.images else "", p.price, qty))
        totals = compute_totals(items, None, cfg)
        status = row["status"]
        orders.append(
            Order(
                id=f"seed-{i}",
                order_number=row["order_number"],
                user_id=user_id,
                order_date=row["order_date"],
                status=status,
                payment_method=row["payment_method"],
                payment_status="paid" if status != "cancelled" else "refunded",
                items=items,
                subtotal=totals.subtotal,
                shipping=totals.shipping,
                tax=totals.tax,
                discount=totals.discount,
                total=totals.total,
            )
        )
    return orders


class MockOrderService(MockService):
    """
    Orders kept in process memory, per user, on top of the seeded history.

    Prices come from the cart snapshot as-is. There is no server-side
    re-validation of price or stock; drift against the catalog is only
    logged.
    """

    def __init__(
        self,
        delay: float = 0.0,
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
        cfg: Settings = settings,
    ):
        super().__init__(delay, failure_rate, rng)
        self.cfg = cfg
        self._orders: Dict[str, List[Order]] = {}

    async def place_order(
        self,
        user: User,
        items: List[CartItem],
        address: Address,
        payment_method: str,
        promo_code: Optional[str] = None,
    ) -> Order:
        if not items:
            raise EmptyCart()
        require_valid(validate_payment_choice(payment_method))

        drift = price_drift(items)
        if drift:
            logger.warning("checkout uses unverified client prices for products %s", ", ".join(drift))

        await self._simulate("orders.place")

        now = datetime.now(timezone.utc)
        totals = compute_totals(items, promo_code, self.cfg)
        order = Order(
            id=str(int(now.timestamp() * 1000)),
            order_number=make_order_number(now),
            user_id=user.id,
            order_date=now.date().isoformat(),
            status="confirmed",
            payment_method=payment_method,
            payment_status="paid",
            items=[
                OrderItem(it.product_id, it.product.name, it.product.images[0] if it.product.images else "", it.price, it.quantity)
                for it in items
            ],
            subtotal=totals.subtotal,
            shipping=totals.shipping,
            tax=totals.tax,
            discount=totals.discount,
            total=totals.total,
            promo_code=totals.promo_code,
            shipping_address=address,
        )
        self._orders.setdefault(user.id, []).append(order)
        logger.info("order %s placed by %s, total %.2f", order.order_number, user.id, order.total)
        return order

    def list_orders(self, user_id: str, status: str = "") -> List[Order]:
        placed = list(reversed(self._orders.get(user_id, [])))
        orders = placed + _seed_orders(user_id, self.cfg)
        if status and status in ORDER_STATUSES:
            orders = [o for o in orders if o.status == status]
        return orders

    def status_counts(self, user_id: str) -> Dict[str, int]:
        counts = Counter(o.status for o in self.list_orders(user_id))
        return {s: counts.get(s, 0) for s in ORDER_STATUSES}

    def get_order(self, user_id: str, order_number: str) -> Optional[Order]:
        return next((o for o in self.list_orders(user_id) if o.order_number == order_number), None)
