# app/storage/memory.py
"""
In-memory store. Each instance owns its own id counters and maps, so a fresh
instance per test (or per process) gives full isolation.

Writes are last-write-wins: update_bar_count swaps the whole record under a
lock, readers always see either the old or the new record.
"""

import threading
from dataclasses import replace
from typing import Optional

from app.storage.base import BarStorage, BarRecord, UserRecord


class MemStorage(BarStorage):
    def __init__(self):
        self._users: dict[int, UserRecord] = {}
        self._bars: dict[int, BarRecord] = {}     # dicts keep insertion order
        self._next_user_id = 1
        self._next_bar_id = 1
        self._lock = threading.Lock()

    # ── Users ─────────────────────────────────────────────────────────────
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in list(self._users.values()):
            if user.username == username:
                return user
        return None

    def create_user(self, username: str, password_hash: str,
                    bar_id: Optional[int] = None, is_bouncer: bool = True) -> UserRecord:
        with self._lock:
            user = UserRecord(id=self._next_user_id, username=username,
                              password_hash=password_hash, is_bouncer=is_bouncer,
                              bar_id=bar_id)
            self._next_user_id += 1
            self._users[user.id] = user
        return user

    # ── Bars ──────────────────────────────────────────────────────────────
    def get_all_bars(self) -> list[BarRecord]:
        return list(self._bars.values())

    def get_bar(self, bar_id: int) -> Optional[BarRecord]:
        return self._bars.get(bar_id)

    def add_bar(self, name: str, capacity: int, address: str, latitude: str,
                longitude: str, current_count: int = 0) -> BarRecord:
        with self._lock:
            bar = BarRecord(id=self._next_bar_id, name=name, current_count=current_count,
                            capacity=capacity, address=address,
                            latitude=latitude, longitude=longitude)
            self._next_bar_id += 1
            self._bars[bar.id] = bar
        return bar

    def update_bar_count(self, bar_id: int, count: int) -> Optional[BarRecord]:
        with self._lock:
            bar = self._bars.get(bar_id)
            if bar is None:
                return None
            updated = replace(bar, current_count=count)
            self._bars[bar_id] = updated
        return updated
