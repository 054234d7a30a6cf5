# tests/conftest.py
"""Shared fixtures: a fresh seeded store and app per test."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.storage import MemStorage, seed_demo_data

MANAGERS = {
    1: ("brats_manager", "bratspass123"),
    2: ("whiskey_manager", "whiskeypass123"),
    3: ("kk_manager", "kkpass123"),
    4: ("chasers_manager", "chaserspass123"),
}


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(STORAGE_BACKEND="memory", SEED_DEMO_DATA=True,
                    ENFORCE_BAR_OWNERSHIP=True, POLL_INTERVAL_MS=10000)


@pytest.fixture
def storage():
    store = MemStorage()
    seed_demo_data(store)
    return store


@pytest.fixture
def app(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def login(client, bar_id=None, username=None, password=None):
    """Log the test client in as the seeded manager of `bar_id`."""
    if bar_id is not None:
        username, password = MANAGERS[bar_id]
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()
