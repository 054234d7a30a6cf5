# app/storage/base.py
"""
Storage contract shared by every backend.

Records are frozen dataclasses: callers get snapshots, and the only way to
change a bar's count is update_bar_count(). Swapping MemStorage for SqlStorage
must not change anything a caller can observe.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BarRecord:
    id: int
    name: str
    current_count: int
    capacity: int
    address: str
    latitude: str
    longitude: str


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    password_hash: str
    is_bouncer: bool = True
    bar_id: Optional[int] = None


class BarStorage(ABC):

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        """Exact match, no case folding."""

    @abstractmethod
    def create_user(self, username: str, password_hash: str,
                    bar_id: Optional[int] = None, is_bouncer: bool = True) -> UserRecord:
        """
        Assign the next id and store the user. Username uniqueness is the
        caller's job (look it up first).
        """

    @abstractmethod
    def get_all_bars(self) -> list[BarRecord]:
        """All bars in insertion order."""

    @abstractmethod
    def get_bar(self, bar_id: int) -> Optional[BarRecord]:
        ...

    @abstractmethod
    def add_bar(self, name: str, capacity: int, address: str, latitude: str,
                longitude: str, current_count: int = 0) -> BarRecord:
        """Used for seeding only; the API never creates bars."""

    @abstractmethod
    def update_bar_count(self, bar_id: int, count: int) -> Optional[BarRecord]:
        """Overwrite current_count. Returns None if the bar does not exist."""

    def ping(self) -> bool:
        """Backend liveness for the health check."""
        return True
