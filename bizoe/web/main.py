from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, FastAPI, Form, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from jinja2 import pass_context
from starlette.exceptions import HTTPException as StarletteHTTPException

from bizoe.config import Settings, settings
from bizoe.constants import (
    LOCALES,
    ORDER_STATUSES,
    PAYMENT_METHODS,
    PROMO_CODES,
    SORT_OPTIONS,
    STATIC_PAGES,
)
from bizoe.db import mock_data
from bizoe.db.storage import ScopedStorage, SqliteStorage, Storage
from bizoe.errors import (
    DefaultPaymentMethodLocked,
    FormValidationError,
    InvalidPromoCode,
    NotAuthenticated,
    OutOfStock,
    ProductNotFound,
    ServiceUnavailable,
)
from bizoe.i18n import resolve_locale, translator
from bizoe.services.account import AccountService, MockAccountService
from bizoe.services.auth import AuthService, MockAuthService
from bizoe.services.catalog import filter_products, get_product, related_products
from bizoe.services.orders import MockOrderService, OrderService
from bizoe.services.pricing import clamp_quantity
from bizoe.services.receipt_pdf import receipt_filename, render_receipt_pdf
from bizoe.store.auth import AuthStore
from bizoe.store.cart import CartStore
from bizoe.store.models import Address
from bizoe.utils.formatters import format_date, money
from bizoe.utils.validators import validate_payment_choice, validate_shipping_address

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

LANG_COOKIE = "lang"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@pass_context
def _money_filter(ctx, value: float) -> str:
    # templates are shared across apps; each render carries its own cfg
    return money(value, ctx.get("cfg", settings))


templates.env.filters["money"] = _money_filter

router = APIRouter()

# camelCase keys accepted by the JSON auth endpoints
_API_KEYS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "confirmPassword": "confirm_password",
    "agreeToTerms": "agree_to_terms",
}


# ---------------- per-visitor state ----------------

def _cfg(request: Request) -> Settings:
    return request.app.state.cfg


def _scoped(request: Request) -> ScopedStorage:
    return ScopedStorage(request.app.state.storage, request.state.sid)


def _cart(request: Request) -> CartStore:
    return CartStore(_scoped(request), cfg=_cfg(request))


def _auth(request: Request) -> AuthStore:
    return AuthStore(_scoped(request))


def _auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def _order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def _account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def _redirect(url: str, msg: str = "", **params: Any) -> RedirectResponse:
    if msg:
        params["msg"] = msg
    if params:
        url = f"{url}{'&' if '?' in url else '?'}{urlencode(params)}"
    return RedirectResponse(url=url, status_code=303)


def _local_url(url: str, default: str) -> str:
    return url if url.startswith("/") and not url.startswith("//") else default


# POST-only routes cannot be replayed by the redirect after login
_LOGIN_RETURN_PAGES = (
    ("/checkout", "/checkout"),
    ("/account/payment", "/account/payment"),
    ("/account/", "/account/profile"),
)


def _login_return(request: Request) -> str:
    path = request.url.path
    if request.method == "GET":
        return path
    for prefix, page in _LOGIN_RETURN_PAGES:
        if path.startswith(prefix):
            return page
    return "/account"


def _render(request: Request, name: str, ctx: dict[str, Any], status_code: int = 200) -> HTMLResponse:
    locale = request.state.locale
    auth = _auth(request)
    base = {
        "cfg": _cfg(request),
        "locale": locale,
        "locales": LOCALES,
        "t": translator(locale),
        "fmt_date": lambda v: format_date(v, locale),
        "user": auth.user,
        "is_authenticated": auth.is_authenticated,
        "cart_count": _cart(request).item_count(),
        "categories": mock_data.CATEGORIES,
        "message": request.query_params.get("msg", ""),
        "errors": {},
    }
    base.update(ctx)
    return templates.TemplateResponse(request, name, base, status_code=status_code)


def _require_user(request: Request):
    return _auth(request).require_user()


async def _form(request: Request) -> Dict[str, str]:
    form = await request.form()
    return {k: str(v) for k, v in form.items()}


def _address(data: Dict[str, str]) -> Address:
    return Address(
        first_name=data.get("first_name", "").strip(),
        last_name=data.get("last_name", "").strip(),
        email=data.get("email", "").strip(),
        phone=data.get("phone", "").strip(),
        address=data.get("address", "").strip(),
        city=data.get("city", "").strip(),
        state=data.get("state", "").strip(),
        zip_code=data.get("zip_code", "").strip(),
        apartment=data.get("apartment", "").strip(),
        country=data.get("country", "").strip() or "TW",
    )


# ---------------- home / catalog ----------------

@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return _render(request, "index.html", {"products": mock_data.FEATURED_PRODUCTS})


@router.get("/products", response_class=HTMLResponse)
def products(request: Request, search: str = "", category: str = "", sort: str = "featured"):
    rows = filter_products(search=search, category=category, sort_by=sort, rng=request.app.state.rng)
    return _render(
        request,
        "products.html",
        {
            "products": rows,
            "search": search,
            "selected_category": category,
            "sort": sort if sort in SORT_OPTIONS else "featured",
            "sort_options": SORT_OPTIONS,
        },
    )


@router.get("/products/{product_id}", response_class=HTMLResponse)
def product_detail(request: Request, product_id: str):
    product = get_product(product_id)
    return _render(
        request,
        "product_detail.html",
        {"product": product, "related": related_products(product)},
    )


# ---------------- cart ----------------

@router.get("/cart", response_class=HTMLResponse)
def cart_get(request: Request):
    cart = _cart(request)
    return _render(request, "cart.html", {"items": cart.items, "totals": cart.totals()})


@router.post("/cart/add")
def cart_add(
    request: Request,
    product_id: str = Form(...),
    quantity: int = Form(1),
    next_url: str = Form("/cart", alias="next"),
):
    product = get_product(product_id)
    back = _local_url(next_url, "/cart")
    cart = _cart(request)
    existing = cart.get_item(product.id)
    in_cart = existing.quantity if existing else 0
    if not product.in_stock or in_cart >= product.stock_quantity:
        return _redirect(back, OutOfStock.code)

    cart.add_item(product, clamp_quantity(quantity, product.stock_quantity - in_cart))
    return _redirect(back, "added_to_cart")


@router.post("/cart/update")
def cart_update(request: Request, product_id: str = Form(...), quantity: int = Form(...)):
    cart = _cart(request)
    item = cart.get_item(product_id)
    if item is None:
        return _redirect("/cart")
    if quantity <= 0:
        cart.remove_item(product_id)
        return _redirect("/cart", "removed_from_cart")
    cart.update_quantity(product_id, clamp_quantity(quantity, item.product.stock_quantity))
    return _redirect("/cart", "cart_updated")


@router.post("/cart/remove")
def cart_remove(request: Request, product_id: str = Form(...)):
    _cart(request).remove_item(product_id)
    return _redirect("/cart", "removed_from_cart")


@router.post("/cart/save-for-later")
def cart_save_for_later(request: Request, product_id: str = Form(...)):
    _cart(request).remove_item(product_id)
    return _redirect("/cart", "saved_for_later")


@router.post("/cart/clear")
def cart_clear(request: Request):
    _cart(request).clear_cart()
    return _redirect("/cart", "cart_cleared")


@router.post("/cart/promo")
def cart_promo(request: Request, code: str = Form("")):
    try:
        _cart(request).apply_promo(code)
    except InvalidPromoCode as e:
        return _redirect("/cart", e.code)
    return _redirect("/cart", "promo_applied")


@router.post("/cart/promo/remove")
def cart_promo_remove(request: Request):
    _cart(request).clear_promo()
    return _redirect("/cart", "promo_removed")


# ---------------- auth ----------------

@router.get("/auth/login", response_class=HTMLResponse)
def login_get(request: Request, next: str = "/account"):
    return _render(request, "login.html", {"form": {}, "next": next})


@router.post("/auth/login")
async def login_post(request: Request):
    data = await _form(request)
    next_url = data.get("next") or "/account"
    try:
        user, token = await _auth_service(request).login(data)
    except FormValidationError as e:
        return _render(request, "login.html", {"form": data, "errors": e.errors, "next": next_url}, status_code=400)
    except ServiceUnavailable as e:
        return _redirect("/auth/login", e.code)
    _auth(request).login(user, token)
    return _redirect(_local_url(next_url, "/account"), "login_success")


@router.get("/auth/register", response_class=HTMLResponse)
def register_get(request: Request):
    return _render(request, "register.html", {"form": {}})


@router.post("/auth/register")
async def register_post(request: Request):
    data = await _form(request)
    try:
        user, token = await _auth_service(request).register(data)
    except FormValidationError as e:
        return _render(request, "register.html", {"form": data, "errors": e.errors}, status_code=400)
    except ServiceUnavailable as e:
        return _redirect("/auth/register", e.code)
    _auth(request).login(user, token)
    return _redirect("/account", "register_success")


@router.post("/auth/logout")
def logout(request: Request):
    _auth(request).logout()
    return _redirect("/", "logout_success")


async def _api_auth(request: Request, action: str) -> JSONResponse:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return JSONResponse({"error": "Validation failed", "errors": {"body": "field_required"}}, status_code=400)
    data = {_API_KEYS.get(k, k): v for k, v in body.items()}

    service = _auth_service(request)
    try:
        user, token = await (service.login(data) if action == "login" else service.register(data))
    except FormValidationError as e:
        return JSONResponse({"error": "Validation failed", "errors": e.errors}, status_code=400)
    except ServiceUnavailable:
        return JSONResponse({"error": "Service unavailable"}, status_code=503)

    _auth(request).login(user, token)
    return JSONResponse({"user": user.to_dict(), "token": token}, status_code=200 if action == "login" else 201)


@router.post("/api/auth/login")
async def api_login(request: Request):
    return await _api_auth(request, "login")


@router.post("/api/auth/register")
async def api_register(request: Request):
    return await _api_auth(request, "register")


# ---------------- account ----------------

@router.get("/account", response_class=HTMLResponse)
def account(request: Request):
    user = _require_user(request)
    orders = _order_service(request)
    return _render(
        request,
        "account.html",
        {"recent_orders": orders.list_orders(user.id)[:3], "counts": orders.status_counts(user.id)},
    )


@router.get("/account/orders", response_class=HTMLResponse)
def account_orders(request: Request, status: str = ""):
    user = _require_user(request)
    orders = _order_service(request)
    return _render(
        request,
        "orders.html",
        {
            "orders": orders.list_orders(user.id, status),
            "counts": orders.status_counts(user.id),
            "statuses": ORDER_STATUSES,
            "selected_status": status if status in ORDER_STATUSES else "",
        },
    )


@router.get("/account/profile", response_class=HTMLResponse)
def profile_get(request: Request):
    user = _require_user(request)
    return _render(request, "profile.html", {"form": user.to_dict(), "password_errors": {}})


@router.post("/account/profile")
async def profile_post(request: Request):
    user = _require_user(request)
    data = await _form(request)
    try:
        changes = await _account_service(request).update_profile(user, data)
    except FormValidationError as e:
        return _render(request, "profile.html", {"form": data, "errors": e.errors, "password_errors": {}}, status_code=400)
    except ServiceUnavailable as e:
        return _redirect("/account/profile", e.code)

    updated = _auth(request).update_user(changes)
    _auth_service(request).remember(updated)
    return _redirect("/account/profile", "profile_updated")


@router.post("/account/password")
async def password_post(request: Request):
    user = _require_user(request)
    data = await _form(request)
    try:
        await _account_service(request).change_password(user, data)
    except FormValidationError as e:
        return _render(
            request, "profile.html", {"form": user.to_dict(), "password_errors": e.errors}, status_code=400
        )
    except ServiceUnavailable as e:
        return _redirect("/account/profile", e.code)
    return _redirect("/account/profile", "password_changed")


@router.get("/account/payment", response_class=HTMLResponse)
def payment_get(request: Request):
    user = _require_user(request)
    methods = _account_service(request).list_payment_methods(user.id)
    return _render(request, "payment.html", {"methods": methods, "form": {"holder_name": user.full_name}})


@router.post("/account/payment")
async def payment_add(request: Request):
    user = _require_user(request)
    data = await _form(request)
    service = _account_service(request)
    try:
        await service.add_payment_method(user.id, data)
    except FormValidationError as e:
        data.pop("cvv", None)
        return _render(
            request,
            "payment.html",
            {"methods": service.list_payment_methods(user.id), "form": data, "errors": e.errors},
            status_code=400,
        )
    except ServiceUnavailable as e:
        return _redirect("/account/payment", e.code)
    return _redirect("/account/payment", "card_added")


@router.post("/account/payment/{method_id}/remove")
def payment_remove(request: Request, method_id: str):
    user = _require_user(request)
    try:
        _account_service(request).remove_payment_method(user.id, method_id)
    except DefaultPaymentMethodLocked as e:
        return _redirect("/account/payment", e.code)
    return _redirect("/account/payment", "card_removed")


@router.post("/account/payment/{method_id}/default")
def payment_default(request: Request, method_id: str):
    user = _require_user(request)
    _account_service(request).set_default_payment_method(user.id, method_id)
    return _redirect("/account/payment", "card_default")


# ---------------- checkout ----------------

def _checkout_page(request: Request, step: int, form: Dict[str, str], **ctx: Any) -> HTMLResponse:
    cart = _cart(request)
    base = {
        "step": step,
        "form": form,
        "items": cart.items,
        "totals": cart.totals(),
        "payment_methods": PAYMENT_METHODS,
    }
    base.update(ctx)
    return _render(request, "checkout.html", base, status_code=400 if ctx.get("errors") else 200)


@router.get("/checkout", response_class=HTMLResponse)
def checkout_get(request: Request):
    user = _require_user(request)
    if _cart(request).is_empty:
        return _redirect("/cart", "cart_empty")
    form = {
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email,
        "phone": user.phone,
        "address": user.address,
        "country": "TW",
    }
    return _checkout_page(request, 1, form)


@router.post("/checkout/shipping")
async def checkout_shipping(request: Request):
    _require_user(request)
    if _cart(request).is_empty:
        return _redirect("/cart", "cart_empty")
    data = await _form(request)
    errors = validate_shipping_address(data)
    if errors:
        return _checkout_page(request, 1, data, errors=errors)
    return _checkout_page(request, 2, data)


@router.post("/checkout/payment")
async def checkout_payment(request: Request):
    _require_user(request)
    if _cart(request).is_empty:
        return _redirect("/cart", "cart_empty")
    data = await _form(request)
    errors = validate_shipping_address(data)
    if errors:
        return _checkout_page(request, 1, data, errors=errors)
    errors = validate_payment_choice(data.get("payment_method", ""))
    if errors:
        return _checkout_page(request, 2, data, errors=errors)
    return _checkout_page(request, 3, data)


@router.post("/checkout/place")
async def checkout_place(request: Request):
    user = _require_user(request)
    cart = _cart(request)
    if cart.is_empty:
        return _redirect("/cart", "cart_empty")
    data = await _form(request)
    errors = validate_shipping_address(data)
    if errors:
        return _checkout_page(request, 1, data, errors=errors)

    try:
        order = await _order_service(request).place_order(
            user, cart.items, _address(data), data.get("payment_method", ""), cart.promo_code
        )
    except FormValidationError as e:
        return _checkout_page(request, 2, data, errors=e.errors)
    except ServiceUnavailable as e:
        return _checkout_page(request, 3, data, message=e.code)

    cart.clear_cart()
    return _redirect("/order-confirmation", "order_placed", orderId=order.order_number, total=f"{order.total:.2f}")


@router.get("/order-confirmation", response_class=HTMLResponse)
def order_confirmation(request: Request, orderId: str = "", total: float = 0.0):
    user = _require_user(request)
    order = _order_service(request).get_order(user.id, orderId) if orderId else None
    return _render(
        request,
        "order_confirmation.html",
        {"order_id": orderId, "total": total, "order": order},
    )


@router.get("/orders/{order_number}/receipt.pdf")
def order_receipt(request: Request, order_number: str):
    user = _require_user(request)
    order = _order_service(request).get_order(user.id, order_number)
    if order is None:
        raise HTTPException(status_code=404)
    return Response(
        content=render_receipt_pdf(order, _cfg(request)),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{receipt_filename(order)}"'},
    )


# ---------------- contact / promotions / static ----------------

@router.get("/contact", response_class=HTMLResponse)
def contact_get(request: Request):
    return _render(request, "contact.html", {"form": {}})


@router.post("/contact")
async def contact_post(request: Request):
    data = await _form(request)
    try:
        await _account_service(request).send_contact_message(data)
    except FormValidationError as e:
        return _render(request, "contact.html", {"form": data, "errors": e.errors}, status_code=400)
    except ServiceUnavailable as e:
        return _render(request, "contact.html", {"form": data, "message": e.code})
    return _redirect("/contact", "message_sent")


@router.get("/promotions", response_class=HTMLResponse)
def promotions(request: Request):
    return _render(
        request,
        "promotions.html",
        {"promotions": mock_data.PROMOTIONS, "promo_codes": PROMO_CODES},
    )


@router.get("/{page}", response_class=HTMLResponse)
def static_page(request: Request, page: str):
    if page not in STATIC_PAGES:
        raise HTTPException(status_code=404)
    cfg = _cfg(request)
    return _render(
        request,
        "page.html",
        {
            "page": page,
            "threshold": money(cfg.free_shipping_threshold, cfg),
            "fee": money(cfg.shipping_fee, cfg),
        },
    )


# ---------------- app ----------------

def create_app(
    storage: Optional[Storage] = None,
    auth_service: Optional[AuthService] = None,
    order_service: Optional[OrderService] = None,
    account_service: Optional[AccountService] = None,
    cfg: Settings = settings,
    rng=None,
) -> FastAPI:
    if storage is None:
        sqlite_storage = SqliteStorage(cfg.db_path)
        sqlite_storage.init_db()
        storage = sqlite_storage

    app = FastAPI(title="BIZOE 3D Store")
    app.state.cfg = cfg
    app.state.storage = storage
    app.state.rng = rng
    app.state.auth_service = auth_service or MockAuthService(cfg.auth_delay, cfg.mock_failure_rate)
    app.state.order_service = order_service or MockOrderService(cfg.order_delay, cfg.mock_failure_rate, cfg=cfg)
    app.state.account_service = account_service or MockAccountService(cfg.account_delay, cfg.mock_failure_rate)

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.middleware("http")
    async def _visitor(request: Request, call_next):
        sid = request.cookies.get(cfg.session_cookie)
        new_sid = not sid
        if new_sid:
            sid = uuid.uuid4().hex
        request.state.sid = sid

        lang = request.query_params.get("lang")
        request.state.locale = resolve_locale(lang, request.cookies.get(LANG_COOKIE), default=cfg.default_locale)

        response = await call_next(request)
        if new_sid:
            response.set_cookie(cfg.session_cookie, sid, httponly=True, samesite="lax")
        if lang in LOCALES:
            response.set_cookie(LANG_COOKIE, lang, samesite="lax")
        return response

    @app.exception_handler(ProductNotFound)
    async def _product_not_found(request: Request, exc: ProductNotFound):
        logger.info("unknown product id %r", exc.product_id)
        return _render(request, "not_found.html", {}, status_code=404)

    @app.exception_handler(NotAuthenticated)
    async def _not_authenticated(request: Request, exc: NotAuthenticated):
        return _redirect("/auth/login", exc.code, next=_login_return(request))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and request.method == "GET":
            return _render(request, "not_found.html", {}, status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        locale = getattr(request.state, "locale", cfg.default_locale)
        return HTMLResponse(translator(locale)("error"), status_code=500)

    app.include_router(router)
    return app
