# tests/test_auth_service.py
"""Unit tests for the authentication gate."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.errors import AuthError, ConflictError
from app.services import auth_service
from app.services.session_store import MemorySessionStore
from app.storage import MemStorage, seed_demo_data


@pytest.fixture
def storage():
    store = MemStorage()
    seed_demo_data(store)
    return store


class TestAuthenticate:
    def test_valid_credentials(self, storage):
        user = auth_service.authenticate(storage, "whiskey_manager", "whiskeypass123")
        assert user.bar_id == 2

    def test_wrong_password(self, storage):
        with pytest.raises(AuthError):
            auth_service.authenticate(storage, "whiskey_manager", "nope")

    def test_unknown_user(self, storage):
        with pytest.raises(AuthError):
            auth_service.authenticate(storage, "ghost", "whiskeypass123")


class TestRegister:
    def test_register_creates_bouncer_without_bar(self, storage):
        user = auth_service.register_user(storage, "doorman", "s3cret")
        assert user.is_bouncer is True
        assert user.bar_id is None
        assert user.password_hash != "s3cret"
        assert auth_service.authenticate(storage, "doorman", "s3cret") == user

    def test_duplicate_username(self, storage):
        with pytest.raises(ConflictError):
            auth_service.register_user(storage, "kk_manager", "whatever")


class TestSessions:
    def test_anonymous_without_cookie(self, storage):
        auth = auth_service.resolve_session(storage, MemorySessionStore(), None)
        assert not auth.is_authenticated()
        assert auth.current_user() is None

    def test_session_round_trip(self, storage):
        sessions = MemorySessionStore()
        user = storage.get_user_by_username("kk_manager")
        sid = auth_service.start_session(sessions, user)

        auth = auth_service.resolve_session(storage, sessions, sid)
        assert auth.is_authenticated()
        assert auth.current_user() == user

        auth_service.end_session(sessions, auth)
        assert not auth_service.resolve_session(storage, sessions, sid).is_authenticated()

    def test_new_login_drops_previous_session(self, storage):
        sessions = MemorySessionStore()
        user = storage.get_user_by_username("kk_manager")
        first = auth_service.start_session(sessions, user)
        second = auth_service.start_session(sessions, user, previous_session_id=first)
        assert sessions.get(first) is None
        assert sessions.get(second) == user.id

    def test_session_for_missing_user_is_anonymous(self, storage):
        sessions = MemorySessionStore()
        sid = sessions.create(12345)
        assert not auth_service.resolve_session(storage, sessions, sid).is_authenticated()
        assert sessions.get(sid) is None
