from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]  # .../bizoe-3d-store
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int | None = None) -> int | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        raise RuntimeError(f"{keys[0]} must be an integer, got {v!r}")


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        return float(v.replace(",", "."))
    except ValueError:
        raise RuntimeError(f"{keys[0]} must be a number, got {v!r}")


def _get_path(*keys: str, default: str) -> str:
    v = _get_env(*keys, default=default)
    return str(v)


@dataclass(frozen=True)
class Settings:
    db_path: str
    currency: str
    decimals: int
    tax_rate: float
    free_shipping_threshold: float
    shipping_fee: float
    default_locale: str
    session_cookie: str
    auth_delay: float
    order_delay: float
    account_delay: float
    mock_failure_rate: float
    host: str
    port: int
    log_level: str


def load_settings() -> Settings:
    s = Settings(
        db_path=_get_path("DB_PATH", "DATABASE_PATH", default=str(ROOT_DIR / "data" / "store.db")),
        currency=_get_env("CURRENCY", default="USD") or "USD",
        decimals=_get_int("DECIMALS", default=2),
        tax_rate=_get_float("TAX_RATE", default=0.08),
        free_shipping_threshold=_get_float("FREE_SHIPPING_THRESHOLD", default=100.0),
        shipping_fee=_get_float("SHIPPING_FEE", default=9.99),
        default_locale=_get_env("DEFAULT_LOCALE", "LANG_DEFAULT", default="zh-TW") or "zh-TW",
        session_cookie=_get_env("SESSION_COOKIE", default="bizoe_sid") or "bizoe_sid",
        auth_delay=_get_float("AUTH_DELAY", default=1.5),
        order_delay=_get_float("ORDER_DELAY", "PAYMENT_DELAY", default=3.0),
        account_delay=_get_float("ACCOUNT_DELAY", default=1.0),
        mock_failure_rate=_get_float("MOCK_FAILURE_RATE", default=0.0),
        host=_get_env("HOST", default="0.0.0.0") or "0.0.0.0",
        port=_get_int("PORT", default=8000),
        log_level=(_get_env("LOG_LEVEL", default="INFO") or "INFO").upper(),
    )

    if not 0.0 <= s.mock_failure_rate <= 1.0:
        raise RuntimeError("MOCK_FAILURE_RATE must be between 0 and 1")
    if s.tax_rate < 0 or s.shipping_fee < 0:
        raise RuntimeError("TAX_RATE and SHIPPING_FEE must not be negative")
    return s


settings = load_settings()
