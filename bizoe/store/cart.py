"""
Cart state for one visitor.

The module-level functions are pure reducers: they take a cart (or None)
and return a new cart, recomputing `total_items`, `total_amount` and
`updated_at` on every change. `CartStore` wraps them with loading and
saving of the `cart-storage` snapshot.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from bizoe.config import Settings, settings
from bizoe.constants import CART_STORAGE_KEY
from bizoe.db.storage import Storage
from bizoe.services.pricing import CartTotals, compute_totals, lookup_promo, normalize_promo_code
from bizoe.store.models import Cart, CartItem, Product
from bizoe.utils.validators import require_positive_number

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_cart(now: datetime) -> Cart:
    ts = now.isoformat()
    return Cart(id="local-cart", created_at=ts, updated_at=ts)


def _with_items(cart: Cart, items: List[CartItem], now: datetime) -> Cart:
    return Cart(
        id=cart.id,
        user_id=cart.user_id,
        items=items,
        total_items=sum(it.quantity for it in items),
        total_amount=sum(it.price * it.quantity for it in items),
        created_at=cart.created_at,
        updated_at=now.isoformat(),
    )


def add_item(cart: Optional[Cart], product: Product, quantity: int, now: datetime) -> Cart:
    require_positive_number(quantity, "quantity")
    cart = cart or new_cart(now)

    if any(it.product_id == product.id for it in cart.items):
        items = [
            CartItem(it.id, it.product_id, it.product, it.quantity + quantity, it.price)
            if it.product_id == product.id
            else it
            for it in cart.items
        ]
    else:
        item_id = f"{product.id}-{int(now.timestamp() * 1000)}"
        # unit price is captured now; later catalog changes do not touch it
        items = cart.items + [CartItem(item_id, product.id, product, quantity, product.price)]
    return _with_items(cart, items, now)


def remove_item(cart: Optional[Cart], product_id: str, now: datetime) -> Optional[Cart]:
    if cart is None:
        return None
    return _with_items(cart, [it for it in cart.items if it.product_id != product_id], now)


def update_quantity(cart: Optional[Cart], product_id: str, quantity: int, now: datetime) -> Optional[Cart]:
    if cart is None:
        return None
    if quantity <= 0:
        return remove_item(cart, product_id, now)
    items = [
        CartItem(it.id, it.product_id, it.product, quantity, it.price) if it.product_id == product_id else it
        for it in cart.items
    ]
    return _with_items(cart, items, now)


class CartStore:
    def __init__(self, storage: Storage, clock: Clock = utcnow, cfg: Settings = settings):
        self.storage = storage
        self.clock = clock
        self.cfg = cfg
        self.cart: Optional[Cart] = None
        self.promo_code: Optional[str] = None
        self._load()

    def _load(self) -> None:
        snap = self.storage.get(CART_STORAGE_KEY) or {}
        try:
            self.cart = Cart.from_dict(snap["cart"]) if snap.get("cart") else None
        except (KeyError, TypeError, ValueError):
            logger.warning("cart snapshot unreadable, starting with an empty cart")
            self.cart = None
        self.promo_code = snap.get("promo_code")

    def _persist(self) -> None:
        self.storage.set(
            CART_STORAGE_KEY,
            {
                "cart": self.cart.to_dict() if self.cart else None,
                "promo_code": self.promo_code,
            },
        )

    @property
    def items(self) -> List[CartItem]:
        return list(self.cart.items) if self.cart else []

    @property
    def is_empty(self) -> bool:
        return not self.items

    def get_item(self, product_id: str) -> Optional[CartItem]:
        return next((it for it in self.items if it.product_id == product_id), None)

    def add_item(self, product: Product, quantity: int = 1) -> Cart:
        self.cart = add_item(self.cart, product, quantity, self.clock())
        self._persist()
        return self.cart

    def remove_item(self, product_id: str) -> None:
        self.cart = remove_item(self.cart, product_id, self.clock())
        self._persist()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        self.cart = update_quantity(self.cart, product_id, quantity, self.clock())
        self._persist()

    def clear_cart(self) -> None:
        self.cart = None
        self.promo_code = None
        self._persist()

    def item_count(self) -> int:
        return self.cart.total_items if self.cart else 0

    def total(self) -> float:
        return self.cart.total_amount if self.cart else 0.0

    def apply_promo(self, code: str) -> int:
        """Remember a valid promo code. Raises InvalidPromoCode otherwise."""
        percent = lookup_promo(code)
        self.promo_code = normalize_promo_code(code)
        self._persist()
        return percent

    def clear_promo(self) -> None:
        self.promo_code = None
        self._persist()

    def totals(self) -> CartTotals:
        return compute_totals(self.items, self.promo_code, self.cfg)
