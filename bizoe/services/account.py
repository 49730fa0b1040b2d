from __future__ import annotations

import logging
import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Protocol

from bizoe.errors import DefaultPaymentMethodLocked
from bizoe.services.mock import MockService
from bizoe.store.auth import PROFILE_FIELDS
from bizoe.store.models import PaymentMethod, User
from bizoe.utils.validators import (
    require_valid,
    validate_card,
    validate_contact,
    validate_password_change,
    validate_profile,
)

logger = logging.getLogger(__name__)


class AccountService(Protocol):
    async def update_profile(self, user: User, data: Mapping[str, object]) -> Dict[str, Any]: ...

    async def change_password(self, user: User, data: Mapping[str, object]) -> None: ...

    def list_payment_methods(self, user_id: str) -> List[PaymentMethod]: ...

    async def add_payment_method(self, user_id: str, data: Mapping[str, object]) -> PaymentMethod: ...

    def remove_payment_method(self, user_id: str, method_id: str) -> None: ...

    def set_default_payment_method(self, user_id: str, method_id: str) -> None: ...

    async def send_contact_message(self, data: Mapping[str, object]) -> None: ...


class MockAccountService(MockService):
    """Profile, password, saved cards and contact form, all in memory."""

    def __init__(self, delay: float = 0.0, failure_rate: float = 0.0, rng: Optional[random.Random] = None):
        super().__init__(delay, failure_rate, rng)
        self._payment_methods: Dict[str, List[PaymentMethod]] = {}
        self.messages: List[Dict[str, str]] = []

    async def update_profile(self, user: User, data: Mapping[str, object]) -> Dict[str, Any]:
        """Validate and "save" a profile edit. Returns the changed fields."""
        require_valid(validate_profile(data))
        await self._simulate("account.update_profile")
        return {k: str(data.get(k) or "").strip() for k in PROFILE_FIELDS}

    async def change_password(self, user: User, data: Mapping[str, object]) -> None:
        require_valid(validate_password_change(data))
        await self._simulate("account.change_password")
        logger.info("password changed for %s", user.id)

    def list_payment_methods(self, user_id: str) -> List[PaymentMethod]:
        return list(self._payment_methods.get(user_id, []))

    async def add_payment_method(self, user_id: str, data: Mapping[str, object]) -> PaymentMethod:
        require_valid(validate_card(data))
        await self._simulate("account.add_payment_method")

        number = str(data["card_number"]).replace(" ", "").replace("-", "")
        methods = self._payment_methods.setdefault(user_id, [])
        method = PaymentMethod(
            id=str(int(datetime.now(timezone.utc).timestamp() * 1000)) + str(len(methods)),
            type="visa" if number.startswith("4") else "mastercard",
            holder_name=str(data["holder_name"]).strip(),
            last4=number[-4:],
            expiry=str(data["expiry"]).strip(),
            is_default=not methods,
        )
        methods.append(method)
        return method

    def remove_payment_method(self, user_id: str, method_id: str) -> None:
        methods = self._payment_methods.get(user_id, [])
        target = next((m for m in methods if m.id == method_id), None)
        if target is None:
            return
        if target.is_default and len(methods) > 1:
            raise DefaultPaymentMethodLocked("choose another default card first")
        self._payment_methods[user_id] = [m for m in methods if m.id != method_id]

    def set_default_payment_method(self, user_id: str, method_id: str) -> None:
        methods = self._payment_methods.get(user_id, [])
        if not any(m.id == method_id for m in methods):
            return
        self._payment_methods[user_id] = [replace(m, is_default=m.id == method_id) for m in methods]

    async def send_contact_message(self, data: Mapping[str, object]) -> None:
        require_valid(validate_contact(data))
        await self._simulate("account.contact")
        self.messages.append({k: str(data.get(k) or "").strip() for k in ("name", "email", "subject", "message")})
