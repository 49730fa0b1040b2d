"""Settings from the environment."""

import pytest

from bizoe.config import load_settings


def test_defaults(monkeypatch):
    for key in ("TAX_RATE", "SHIPPING_FEE", "FREE_SHIPPING_THRESHOLD", "CURRENCY", "DEFAULT_LOCALE"):
        monkeypatch.delenv(key, raising=False)
    s = load_settings()
    assert s.tax_rate == 0.08
    assert s.shipping_fee == 9.99
    assert s.free_shipping_threshold == 100.0
    assert s.currency == "USD"
    assert s.default_locale == "zh-TW"


def test_comma_decimal(monkeypatch):
    monkeypatch.setenv("SHIPPING_FEE", "4,50")
    assert load_settings().shipping_fee == 4.5


@pytest.mark.parametrize(
    "key, value",
    [("PORT", "eighty"), ("TAX_RATE", "lots"), ("MOCK_FAILURE_RATE", "2"), ("SHIPPING_FEE", "-1")],
)
def test_bad_values_refuse_to_start(monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(RuntimeError):
        load_settings()
