from __future__ import annotations

import random
import string
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Protocol, Tuple

from bizoe.constants import MOCK_TOKEN
from bizoe.services.mock import MockService
from bizoe.store.models import User
from bizoe.utils.validators import require_valid, validate_login, validate_registration

AuthResult = Tuple[User, str]


class AuthService(Protocol):
    async def login(self, data: Mapping[str, object]) -> AuthResult: ...

    async def register(self, data: Mapping[str, object]) -> AuthResult: ...

    def remember(self, user: User) -> None: ...


def _random_id(rng: random.Random, n: int = 9) -> str:
    return "".join(rng.choice(string.ascii_lowercase + string.digits) for _ in range(n))


class MockAuthService(MockService):
    """
    Login and registration that always succeed once the form is valid.

    No credential check: any password is accepted. Accounts registered in
    this process are remembered by email so a later login returns the same
    user; unknown emails get a fresh mock user.
    """

    def __init__(self, delay: float = 0.0, failure_rate: float = 0.0, rng: Optional[random.Random] = None):
        super().__init__(delay, failure_rate, rng)
        self._accounts: Dict[str, User] = {}

    def _new_user(self, email: str, first_name: str, last_name: str, phone: str = "") -> User:
        now = datetime.now(timezone.utc).isoformat()
        return User(
            id=_random_id(self.rng),
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            created_at=now,
            updated_at=now,
        )

    async def login(self, data: Mapping[str, object]) -> AuthResult:
        require_valid(validate_login(data))
        await self._simulate("auth.login")

        email = str(data["email"]).strip().lower()
        user = self._accounts.get(email)
        if user is None:
            user = self._new_user(email, email.split("@")[0], "")
            self._accounts[email] = user
        return user, MOCK_TOKEN

    async def register(self, data: Mapping[str, object]) -> AuthResult:
        require_valid(validate_registration(data))
        await self._simulate("auth.register")

        email = str(data["email"]).strip().lower()
        user = self._new_user(
            email,
            str(data["first_name"]).strip(),
            str(data["last_name"]).strip(),
            str(data.get("phone") or "").strip(),
        )
        self._accounts[email] = user
        return user, MOCK_TOKEN

    def remember(self, user: User) -> None:
        """Keep profile edits visible to later logins with the same email."""
        self._accounts[user.email.lower()] = user
