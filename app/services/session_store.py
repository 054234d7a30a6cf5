# app/services/session_store.py
"""
Server-side session store. The client only ever holds the opaque session id
(in a cookie); the mapping session id -> user id lives here.

MemorySessionStore is process-local, like the in-memory bar store. A shared
store (Redis, DB table) would implement the same four methods.
"""

import secrets
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)


class SessionStore(ABC):

    @abstractmethod
    def create(self, user_id: int) -> str:
        """Start a session for user_id and return its opaque id."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[int]:
        """User id for a live session, None if unknown or expired."""

    @abstractmethod
    def destroy(self, session_id: str) -> None:
        ...

    @abstractmethod
    def prune(self) -> int:
        """Drop expired sessions, return how many were removed."""


class MemorySessionStore(SessionStore):
    def __init__(self, ttl_seconds: int = 86400, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, tuple[int, float]] = {}   # sid -> (user_id, expires_at)
        self._lock = threading.Lock()
        self._last_prune = clock()

    def create(self, user_id: int) -> str:
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[session_id] = (user_id, self._clock() + self.ttl_seconds)
        self._maybe_prune()
        return session_id

    def get(self, session_id: str) -> Optional[int]:
        if not session_id:
            return None
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            user_id, expires_at = entry
            if expires_at <= self._clock():
                del self._sessions[session_id]
                return None
        return user_id

    def destroy(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def prune(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [sid for sid, (_, exp) in self._sessions.items() if exp <= now]
            for sid in expired:
                del self._sessions[sid]
            self._last_prune = now
        if expired:
            logger.debug(f"Pruned {len(expired)} expired sessions")
        return len(expired)

    def __len__(self):
        return len(self._sessions)

    def _maybe_prune(self):
        # Sweep at most once per TTL period, piggybacking on logins
        if self._clock() - self._last_prune >= self.ttl_seconds:
            self.prune()
