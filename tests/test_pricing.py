"""Cart totals: subtotal, shipping, tax, promo discount, total."""

import pytest

from bizoe.errors import InvalidPromoCode
from bizoe.services.pricing import (
    calc_shipping,
    clamp_quantity,
    compute_totals,
    lookup_promo,
)
from bizoe.store.models import CartItem


def _item(product, quantity, price=None):
    return CartItem(f"{product.id}-1", product.id, product, quantity, product.price if price is None else price)


class TestComputeTotals:
    def test_reference_cart(self, cfg, printer, resin):
        """29.99 x 2 + 899.99 x 1: free shipping, 8% tax."""
        totals = compute_totals([_item(resin, 2), _item(printer, 1)], None, cfg)

        assert totals.subtotal == pytest.approx(959.97)
        assert totals.shipping == 0
        assert totals.free_shipping
        assert totals.tax == pytest.approx(76.7976)
        assert round(totals.tax, 2) == pytest.approx(76.80)
        assert totals.discount == 0
        assert round(totals.total, 2) == pytest.approx(1036.77)

    def test_empty_cart(self, cfg):
        totals = compute_totals([], None, cfg)
        assert totals.subtotal == 0
        assert totals.shipping == cfg.shipping_fee
        assert totals.tax == 0

    def test_small_order_pays_shipping(self, cfg, resin):
        totals = compute_totals([_item(resin, 1)], None, cfg)
        assert totals.shipping == pytest.approx(9.99)
        assert totals.total == pytest.approx(29.99 + 9.99 + 29.99 * 0.08)

    def test_known_promo_discounts_subtotal(self, cfg, printer):
        totals = compute_totals([_item(printer, 1)], "save15", cfg)
        assert totals.promo_code == "SAVE15"
        assert totals.promo_percent == 15
        assert totals.discount == pytest.approx(899.99 * 0.15)
        assert totals.total == pytest.approx(899.99 + 899.99 * 0.08 - 899.99 * 0.15)
        assert not totals.promo_error

    def test_unknown_promo_gives_no_discount_and_error(self, cfg, printer):
        totals = compute_totals([_item(printer, 1)], "FREESTUFF", cfg)
        assert totals.discount == 0
        assert totals.promo_error
        assert totals.promo_code is None

    def test_uses_captured_price(self, cfg, printer):
        totals = compute_totals([_item(printer, 2, price=100.0)], None, cfg)
        assert totals.subtotal == pytest.approx(200.0)


class TestShipping:
    @pytest.mark.parametrize(
        "subtotal, expected",
        [(99.99, 9.99), (100.0, 0.0), (100.01, 0.0), (0.0, 9.99)],
    )
    def test_threshold(self, cfg, subtotal, expected):
        assert calc_shipping(subtotal, cfg) == expected


class TestPromoCodes:
    @pytest.mark.parametrize(
        "code, percent",
        [("WELCOME10", 10), ("save15", 15), (" NewUser ", 20), ("bizoe2024", 25)],
    )
    def test_allow_list_case_insensitive(self, code, percent):
        assert lookup_promo(code) == percent

    @pytest.mark.parametrize("code", ["", "SAVE16", "WELCOME 10"])
    def test_unknown(self, code):
        with pytest.raises(InvalidPromoCode):
            lookup_promo(code)


class TestClampQuantity:
    def test_clamps_into_stock_range(self):
        assert clamp_quantity(0, 10) == 1
        assert clamp_quantity(-3, 10) == 1
        assert clamp_quantity(5, 10) == 5
        assert clamp_quantity(50, 10) == 10
