"""
Auth state for one visitor: anonymous or authenticated.

`AuthState` is either fully anonymous (no user, no token) or fully
authenticated (user and token present). Transitions are pure functions;
`AuthStore` persists the `auth-storage` snapshot after each one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bizoe.constants import AUTH_STORAGE_KEY
from bizoe.db.storage import Storage
from bizoe.errors import NotAuthenticated
from bizoe.store.models import User

logger = logging.getLogger(__name__)

# fields a profile edit may touch
PROFILE_FIELDS = ("first_name", "last_name", "phone", "address")


@dataclass(frozen=True)
class AuthState:
    user: Optional[User] = None
    token: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and bool(self.token)


ANONYMOUS = AuthState()


def authenticate(user: User, token: str) -> AuthState:
    if not token:
        raise ValueError("token must not be empty")
    return AuthState(user=user, token=token)


def logout(state: AuthState) -> AuthState:
    return ANONYMOUS


def update_user(state: AuthState, changes: Dict[str, Any], now: datetime) -> AuthState:
    if not state.is_authenticated:
        return state
    fields = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
    user = replace(state.user, updated_at=now.isoformat(), **fields)
    return AuthState(user=user, token=state.token)


class AuthStore:
    def __init__(self, storage: Storage):
        self.storage = storage
        self.state = ANONYMOUS
        self._load()

    def _load(self) -> None:
        snap = self.storage.get(AUTH_STORAGE_KEY) or {}
        if not snap.get("is_authenticated"):
            self.state = ANONYMOUS
            return
        try:
            self.state = authenticate(User.from_dict(snap["user"]), snap.get("token") or "")
        except (KeyError, TypeError, ValueError):
            # half-written snapshot: treat the visitor as anonymous
            logger.warning("auth snapshot incomplete, visitor is anonymous")
            self.state = ANONYMOUS

    def _persist(self) -> None:
        self.storage.set(
            AUTH_STORAGE_KEY,
            {
                "user": self.state.user.to_dict() if self.state.user else None,
                "token": self.state.token,
                "is_authenticated": self.state.is_authenticated,
            },
        )

    @property
    def user(self) -> Optional[User]:
        return self.state.user

    @property
    def token(self) -> Optional[str]:
        return self.state.token

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def require_user(self) -> User:
        if not self.state.is_authenticated:
            raise NotAuthenticated()
        return self.state.user

    def login(self, user: User, token: str) -> None:
        self.state = authenticate(user, token)
        self._persist()
        logger.info("user %s signed in", user.id)

    def logout(self) -> None:
        self.state = logout(self.state)
        self._persist()

    def update_user(self, changes: Dict[str, Any]) -> Optional[User]:
        self.state = update_user(self.state, changes, datetime.now(timezone.utc))
        self._persist()
        return self.state.user
