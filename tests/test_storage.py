# tests/test_storage.py
"""Contract tests run against every storage backend (memory + SQLite)."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from dataclasses import FrozenInstanceError
from app.config import Settings
from app.database import make_engine, make_session_factory, create_tables
from app.errors import ConflictError
from app.models.user import User
from app.storage import MemStorage, create_storage, seed_demo_data
from app.storage.seed import MADISON_BARS, BAR_OWNERS
from app.storage.sql import SqlStorage
from app.utils.passwords import verify_password


def _sql_storage():
    engine = make_engine("sqlite://")
    create_tables(engine)
    return SqlStorage(make_session_factory(engine))


@pytest.fixture(params=["memory", "sql"])
def empty_storage(request):
    return MemStorage() if request.param == "memory" else _sql_storage()


@pytest.fixture
def seeded(empty_storage):
    seed_demo_data(empty_storage)
    return empty_storage


class TestStorageContract:
    def test_seed_order_and_ids(self, seeded):
        bars = seeded.get_all_bars()
        assert [b.id for b in bars] == [1, 2, 3, 4]
        assert [b.name for b in bars] == [b["name"] for b in MADISON_BARS]
        assert all(b.current_count == 0 for b in bars)

    def test_coordinates_kept_as_strings(self, seeded):
        bar = seeded.get_bar(4)
        assert bar.latitude == "43.074090"
        assert bar.longitude == "-89.393226"

    def test_seeded_managers_own_their_bar(self, seeded):
        for i, owner in enumerate(BAR_OWNERS, start=1):
            user = seeded.get_user_by_username(owner["username"])
            assert user.id == i
            assert user.bar_id == owner["bar_id"]
            assert user.is_bouncer is True

    def test_seeded_passwords_are_hashed(self, seeded):
        user = seeded.get_user_by_username("brats_manager")
        assert user.password_hash != "bratspass123"
        assert verify_password(user.password_hash, "bratspass123")

    def test_seeding_twice_is_a_noop(self, seeded):
        seed_demo_data(seeded)
        assert len(seeded.get_all_bars()) == 4

    def test_get_bar_unknown(self, seeded):
        assert seeded.get_bar(999) is None

    def test_update_bar_count(self, seeded):
        updated = seeded.update_bar_count(2, 75)
        assert updated.current_count == 75
        assert seeded.get_bar(2).current_count == 75
        assert [b.current_count for b in seeded.get_all_bars()] == [0, 75, 0, 0]

    def test_update_unknown_bar_returns_none(self, seeded):
        assert seeded.update_bar_count(999, 5) is None

    def test_last_write_wins(self, seeded):
        seeded.update_bar_count(1, 10)
        seeded.update_bar_count(1, 3)
        assert seeded.get_bar(1).current_count == 3

    def test_records_are_snapshots(self, seeded):
        bar = seeded.get_bar(1)
        with pytest.raises(FrozenInstanceError):
            bar.current_count = 99
        seeded.update_bar_count(1, 12)
        assert bar.current_count == 0

    def test_create_user_defaults(self, seeded):
        user = seeded.create_user("newbie", "hash")
        assert user.id == 5
        assert user.is_bouncer is True
        assert user.bar_id is None
        assert seeded.get_user(user.id) == user

    def test_username_lookup_is_exact(self, seeded):
        assert seeded.get_user_by_username("Brats_Manager") is None
        assert seeded.get_user_by_username("brats_manager") is not None

    def test_add_bar_round_trip(self, empty_storage):
        bar = empty_storage.add_bar(name="Test", capacity=100, address="x",
                                    latitude="1.0", longitude="2.0")
        empty_storage.update_bar_count(bar.id, 80)
        assert empty_storage.get_all_bars()[0].current_count == 80

    def test_ping(self, seeded):
        assert seeded.ping() is True


class TestStorageIsolation:
    def test_fresh_instances_do_not_share_state(self):
        a, b = MemStorage(), MemStorage()
        seed_demo_data(a)
        a.update_bar_count(1, 50)
        assert b.get_all_bars() == []
        seed_demo_data(b)
        assert b.get_bar(1).current_count == 0


class TestSqlStorage:
    def test_duplicate_username_is_conflict(self):
        storage = _sql_storage()
        storage.create_user("dup", "hash")
        with pytest.raises(ConflictError):
            storage.create_user("dup", "hash")

    def test_direct_orm_insert_defaults_to_bouncer(self):
        engine = make_engine("sqlite://")
        create_tables(engine)
        session_factory = make_session_factory(engine)
        with session_factory() as db:
            db.add(User(username="direct", password_hash="hash"))
            db.commit()

        user = SqlStorage(session_factory).get_user_by_username("direct")
        assert user.is_bouncer is True
        assert user.bar_id is None


class TestCreateStorage:
    def test_memory_backend_seeded(self):
        storage = create_storage(Settings(STORAGE_BACKEND="memory", SEED_DEMO_DATA=True))
        assert isinstance(storage, MemStorage)
        assert len(storage.get_all_bars()) == 4

    def test_sql_backend(self):
        storage = create_storage(Settings(STORAGE_BACKEND="sql", DATABASE_URL="sqlite://",
                                          SEED_DEMO_DATA=True))
        assert isinstance(storage, SqlStorage)
        assert len(storage.get_all_bars()) == 4

    def test_unseeded(self):
        storage = create_storage(Settings(STORAGE_BACKEND="memory", SEED_DEMO_DATA=False))
        assert storage.get_all_bars() == []

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage(Settings(STORAGE_BACKEND="redis"))
