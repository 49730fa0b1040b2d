"""Auth state machine, persisted AuthStore and the mock auth service."""

import random

import pytest

from bizoe.constants import AUTH_STORAGE_KEY, MOCK_TOKEN
from bizoe.errors import FormValidationError, NotAuthenticated, ServiceUnavailable
from bizoe.services.auth import MockAuthService
from bizoe.store.auth import ANONYMOUS, AuthStore, authenticate, logout
from bizoe.store.models import User

REGISTRATION = {
    "first_name": "小明",
    "last_name": "王",
    "email": "Ming@Example.com",
    "phone": "+886 912-345-678",
    "password": "Secret1",
    "confirm_password": "Secret1",
    "agree_to_terms": "on",
}


def _user(**kw):
    data = dict(id="u1", email="a@b.co", first_name="A", last_name="B", created_at="t0", updated_at="t0")
    data.update(kw)
    return User(**data)


class TestTransitions:
    def test_anonymous_is_not_authenticated(self):
        assert not ANONYMOUS.is_authenticated
        assert ANONYMOUS.user is None and ANONYMOUS.token is None

    def test_authenticate_requires_token(self):
        with pytest.raises(ValueError):
            authenticate(_user(), "")

    def test_logout_is_fully_anonymous(self):
        state = logout(authenticate(_user(), MOCK_TOKEN))
        assert state == ANONYMOUS


class TestAuthStore:
    def test_login_persists_snapshot(self, storage):
        store = AuthStore(storage)
        store.login(_user(), MOCK_TOKEN)

        snap = storage.get(AUTH_STORAGE_KEY)
        assert snap["is_authenticated"] is True
        assert snap["token"] == MOCK_TOKEN
        assert AuthStore(storage).user.email == "a@b.co"

    def test_logout_clears_everything(self, storage):
        store = AuthStore(storage)
        store.login(_user(), MOCK_TOKEN)
        store.logout()

        assert not store.is_authenticated
        assert store.user is None and store.token is None
        assert storage.get(AUTH_STORAGE_KEY) == {"user": None, "token": None, "is_authenticated": False}
        with pytest.raises(NotAuthenticated):
            store.require_user()

    def test_half_written_snapshot_is_anonymous(self, storage):
        storage.set(AUTH_STORAGE_KEY, {"user": None, "token": MOCK_TOKEN, "is_authenticated": True})
        assert not AuthStore(storage).is_authenticated

    def test_update_user_only_touches_profile_fields(self, storage):
        store = AuthStore(storage)
        store.login(_user(), MOCK_TOKEN)
        user = store.update_user({"first_name": "Z", "email": "evil@x.co", "id": "other"})

        assert user.first_name == "Z"
        assert user.email == "a@b.co"
        assert user.id == "u1"
        assert user.updated_at != "t0"

    def test_update_user_when_anonymous_is_noop(self, storage):
        store = AuthStore(storage)
        assert store.update_user({"first_name": "Z"}) is None


class TestMockAuthService:
    async def test_register_returns_user_and_token(self):
        user, token = await MockAuthService().register(REGISTRATION)
        assert token == MOCK_TOKEN
        assert user.first_name == "小明"
        assert user.email == "ming@example.com"
        assert len(user.id) == 9

    async def test_register_validation(self):
        data = dict(REGISTRATION, password="short", confirm_password="other", agree_to_terms="")
        with pytest.raises(FormValidationError) as exc:
            await MockAuthService().register(data)
        assert exc.value.errors == {
            "password": "password_too_short",
            "confirm_password": "password_mismatch",
            "agree_to_terms": "terms_required",
        }

    async def test_login_accepts_any_password(self):
        user, token = await MockAuthService().login({"email": "x@y.io", "password": "anything"})
        assert user.email == "x@y.io"
        assert token == MOCK_TOKEN

    async def test_login_after_register_returns_same_account(self):
        service = MockAuthService()
        registered, _ = await service.register(REGISTRATION)
        user, _ = await service.login({"email": "ming@example.com", "password": "x"})
        assert user == registered

    async def test_login_validation(self):
        with pytest.raises(FormValidationError) as exc:
            await MockAuthService().login({"email": "nope", "password": ""})
        assert exc.value.errors == {"email": "email_invalid", "password": "password_required"}

    async def test_simulated_failure(self):
        service = MockAuthService(failure_rate=1.0, rng=random.Random(0))
        with pytest.raises(ServiceUnavailable):
            await service.login({"email": "x@y.io", "password": "p"})
