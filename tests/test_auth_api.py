# tests/test_auth_api.py
"""HTTP tests for register / login / logout / current user."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from fastapi.testclient import TestClient
from app.main import create_app
from app.services.session_store import MemorySessionStore
from conftest import FakeClock, login


class TestLogin:
    def test_login_sets_session_cookie(self, client, settings):
        resp = client.post("/api/login", json={"username": "kk_manager", "password": "kkpass123"})
        assert resp.status_code == 200
        assert resp.json() == {"id": 3, "username": "kk_manager", "isBouncer": True, "barId": 3}
        assert settings.SESSION_COOKIE_NAME in resp.cookies
        assert "httponly" in resp.headers["set-cookie"].lower()

    def test_login_never_returns_credential(self, client):
        data = login(client, bar_id=1)
        assert "password" not in data
        assert "passwordHash" not in data

    def test_bad_password(self, client):
        resp = client.post("/api/login", json={"username": "kk_manager", "password": "wrong"})
        assert resp.status_code == 401
        assert client.get("/api/user").status_code == 401

    def test_unknown_user(self, client):
        resp = client.post("/api/login", json={"username": "ghost", "password": "x"})
        assert resp.status_code == 401

    def test_missing_fields(self, client):
        resp = client.post("/api/login", json={"username": "kk_manager"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Invalid request"


class TestCurrentUser:
    def test_anonymous(self, client):
        assert client.get("/api/user").status_code == 401

    def test_after_login(self, client):
        login(client, bar_id=2)
        resp = client.get("/api/user")
        assert resp.status_code == 200
        assert resp.json()["username"] == "whiskey_manager"

    def test_logout(self, client):
        login(client, bar_id=2)
        assert client.post("/api/logout").status_code == 200
        assert client.get("/api/user").status_code == 401

    def test_logout_when_anonymous(self, client):
        assert client.post("/api/logout").status_code == 200

    def test_session_expires(self, settings, storage):
        clock = FakeClock()
        sessions = MemorySessionStore(ttl_seconds=60, clock=clock)
        with TestClient(create_app(settings=settings, storage=storage, sessions=sessions)) as client:
            login(client, bar_id=1)
            assert client.get("/api/user").status_code == 200
            clock.advance(61)
            assert client.get("/api/user").status_code == 401
            assert client.patch("/api/bars/1/count", json={"count": 3}).status_code == 401


class TestRegister:
    def test_register_logs_in(self, client):
        resp = client.post("/api/register", json={"username": "doorman", "password": "pw"})
        assert resp.status_code == 201
        assert resp.json() == {"id": 5, "username": "doorman", "isBouncer": True, "barId": None}
        assert client.get("/api/user").json()["username"] == "doorman"

    def test_duplicate_username(self, client):
        resp = client.post("/api/register", json={"username": "brats_manager", "password": "pw"})
        assert resp.status_code == 409

    def test_empty_username(self, client):
        resp = client.post("/api/register", json={"username": "", "password": "pw"})
        assert resp.status_code == 400
