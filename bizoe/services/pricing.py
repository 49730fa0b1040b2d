from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from bizoe.config import Settings, settings
from bizoe.constants import PROMO_CODES
from bizoe.errors import InvalidPromoCode
from bizoe.store.models import CartItem


@dataclass(frozen=True)
class CartTotals:
    subtotal: float
    shipping: float
    tax: float
    discount: float
    total: float
    promo_code: Optional[str] = None
    promo_percent: int = 0
    promo_error: bool = False

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0


def normalize_promo_code(code: str) -> str:
    return (code or "").strip().upper()


def lookup_promo(code: str) -> int:
    """Return the discount percentage for a promo code, case-insensitive."""
    key = normalize_promo_code(code)
    if key not in PROMO_CODES:
        raise InvalidPromoCode(code)
    return PROMO_CODES[key]


def calc_subtotal(items: Iterable[CartItem]) -> float:
    return sum(it.price * it.quantity for it in items)


def calc_shipping(subtotal: float, cfg: Settings = settings) -> float:
    return 0.0 if subtotal >= cfg.free_shipping_threshold else cfg.shipping_fee


def calc_tax(subtotal: float, cfg: Settings = settings) -> float:
    return subtotal * cfg.tax_rate


def compute_totals(
    items: Iterable[CartItem],
    promo_code: Optional[str] = None,
    cfg: Settings = settings,
) -> CartTotals:
    """
    subtotal + shipping + tax - discount, plain float arithmetic.

    An unknown promo code gives no discount and sets `promo_error`.
    """
    subtotal = calc_subtotal(items)
    shipping = calc_shipping(subtotal, cfg)
    tax = calc_tax(subtotal, cfg)

    percent = 0
    code = None
    promo_error = False
    if promo_code:
        try:
            percent = lookup_promo(promo_code)
            code = normalize_promo_code(promo_code)
        except InvalidPromoCode:
            promo_error = True

    discount = subtotal * percent / 100
    return CartTotals(
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        discount=discount,
        total=subtotal + shipping + tax - discount,
        promo_code=code,
        promo_percent=percent,
        promo_error=promo_error,
    )


def clamp_quantity(quantity: int, stock_quantity: int) -> int:
    return max(1, min(int(quantity), int(stock_quantity)))
