from __future__ import annotations

from datetime import date, datetime

from bizoe.config import Settings, settings


def money(v: float, cfg: Settings = settings) -> str:
    return f"{v:,.{cfg.decimals}f} {cfg.currency}"


def format_date(value: str, locale: str = "zh-TW") -> str:
    if not value:
        return ""
    try:
        d = datetime.fromisoformat(value).date() if "T" in value else date.fromisoformat(value)
    except ValueError:
        return value
    if locale == "zh-TW":
        return f"{d.year}年{d.month}月{d.day}日"
    return d.strftime("%b %d, %Y")
