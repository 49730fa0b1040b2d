from __future__ import annotations

from typing import Dict


class StoreError(Exception):
    """Base class for storefront errors. `code` is an i18n message key."""

    code = "error"

    def __init__(self, message: str = "", code: str | None = None):
        super().__init__(message or self.code)
        if code:
            self.code = code


class FormValidationError(StoreError):
    code = "form_invalid"

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(sorted(errors)))
        self.errors = dict(errors)


class ServiceUnavailable(StoreError):
    code = "network_error"


class ProductNotFound(StoreError):
    code = "product_not_found"

    def __init__(self, product_id: str):
        super().__init__(f"product not found: {product_id}")
        self.product_id = product_id


class InvalidPromoCode(StoreError):
    code = "promo_invalid"

    def __init__(self, promo_code: str):
        super().__init__(f"invalid promo code: {promo_code}")
        self.promo_code = promo_code


class OutOfStock(StoreError):
    code = "out_of_stock"


class EmptyCart(StoreError):
    code = "cart_empty"


class NotAuthenticated(StoreError):
    code = "login_required"


class DefaultPaymentMethodLocked(StoreError):
    code = "payment_default_locked"
