from __future__ import annotations

import re
from typing import Dict, Mapping

from bizoe.constants import PAYMENT_METHODS, SHIPPING_REQUIRED_FIELDS
from bizoe.errors import FormValidationError

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,}$")
CARD_NUMBER_RE = re.compile(r"^\d{13,19}$")
EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/\d{2}$")
CVV_RE = re.compile(r"^\d{3,4}$")

# error values are i18n message keys


def require_positive_number(v: float, name: str = "value") -> None:
    if v <= 0:
        raise ValueError(f"{name} must be > 0")


def _blank(data: Mapping[str, object], name: str) -> bool:
    return not str(data.get(name) or "").strip()


def _password_strength_error(password: str) -> str | None:
    if not password:
        return "password_required"
    if len(password) < 6:
        return "password_too_short"
    if not (re.search(r"[a-z]", password) and re.search(r"[A-Z]", password) and re.search(r"\d", password)):
        return "password_weak"
    return None


def validate_registration(data: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _blank(data, "first_name"):
        errors["first_name"] = "first_name_required"
    if _blank(data, "last_name"):
        errors["last_name"] = "last_name_required"

    email = str(data.get("email") or "")
    if not email:
        errors["email"] = "email_required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "email_invalid"

    phone = str(data.get("phone") or "")
    if not phone:
        errors["phone"] = "phone_required"
    elif not PHONE_RE.match(phone):
        errors["phone"] = "phone_invalid"

    password = str(data.get("password") or "")
    err = _password_strength_error(password)
    if err:
        errors["password"] = err

    confirm = str(data.get("confirm_password") or "")
    if not confirm:
        errors["confirm_password"] = "confirm_password_required"
    elif password != confirm:
        errors["confirm_password"] = "password_mismatch"

    if not data.get("agree_to_terms"):
        errors["agree_to_terms"] = "terms_required"
    return errors


def validate_login(data: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    email = str(data.get("email") or "")
    if not email:
        errors["email"] = "email_required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "email_invalid"
    if not data.get("password"):
        errors["password"] = "password_required"
    return errors


def validate_shipping_address(data: Mapping[str, object]) -> Dict[str, str]:
    errors = {name: "field_required" for name in SHIPPING_REQUIRED_FIELDS if _blank(data, name)}
    email = str(data.get("email") or "")
    if "email" not in errors and not EMAIL_RE.search(email):
        errors["email"] = "email_invalid"
    return errors


def validate_payment_choice(method: str) -> Dict[str, str]:
    if not method:
        return {"payment_method": "payment_method_required"}
    if method not in PAYMENT_METHODS:
        return {"payment_method": "payment_method_invalid"}
    return {}


def validate_password_change(data: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if not data.get("current_password"):
        errors["current_password"] = "current_password_required"
    new = str(data.get("new_password") or "")
    if not new:
        errors["new_password"] = "password_required"
    elif len(new) < 6:
        errors["new_password"] = "password_too_short"
    if new != str(data.get("confirm_new_password") or ""):
        errors["confirm_new_password"] = "password_mismatch"
    return errors


def validate_profile(data: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    if _blank(data, "first_name"):
        errors["first_name"] = "first_name_required"
    if _blank(data, "last_name"):
        errors["last_name"] = "last_name_required"
    phone = str(data.get("phone") or "")
    if phone and not PHONE_RE.match(phone):
        errors["phone"] = "phone_invalid"
    return errors


def validate_contact(data: Mapping[str, object]) -> Dict[str, str]:
    errors = {name: "field_required" for name in ("name", "email", "subject", "message") if _blank(data, name)}
    if "email" not in errors and not EMAIL_RE.search(str(data.get("email"))):
        errors["email"] = "email_invalid"
    return errors


def validate_card(data: Mapping[str, object]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    number = str(data.get("card_number") or "").replace(" ", "").replace("-", "")
    if not number:
        errors["card_number"] = "field_required"
    elif not CARD_NUMBER_RE.match(number):
        errors["card_number"] = "card_number_invalid"
    expiry = str(data.get("expiry") or "").strip()
    if not expiry:
        errors["expiry"] = "field_required"
    elif not EXPIRY_RE.match(expiry):
        errors["expiry"] = "expiry_invalid"
    cvv = str(data.get("cvv") or "").strip()
    if not cvv:
        errors["cvv"] = "field_required"
    elif not CVV_RE.match(cvv):
        errors["cvv"] = "cvv_invalid"
    if _blank(data, "holder_name"):
        errors["holder_name"] = "field_required"
    return errors


def require_valid(errors: Dict[str, str]) -> None:
    if errors:
        raise FormValidationError(errors)
