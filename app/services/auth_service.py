# app/services/auth_service.py
"""
Authentication gate: credential checks, registration, and the per-request
view of who is calling (RequestAuth).

Session state per caller: Anonymous -> Authenticated(user_id) on login,
back to Anonymous on logout or expiry.
"""

from dataclasses import dataclass
from typing import Optional

from app.errors import AuthError, ConflictError
from app.services.session_store import SessionStore
from app.storage.base import BarStorage, UserRecord
from app.utils.passwords import hash_password, verify_password
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RequestAuth:
    """What the API layer sees about the caller of one request."""
    user: Optional[UserRecord] = None
    session_id: Optional[str] = None

    def is_authenticated(self) -> bool:
        return self.user is not None

    def current_user(self) -> Optional[UserRecord]:
        return self.user


def authenticate(storage: BarStorage, username: str, password: str) -> UserRecord:
    """Return the user for valid credentials, raise AuthError otherwise."""
    user = storage.get_user_by_username(username)
    if not user or not verify_password(user.password_hash, password):
        logger.warning(f"Failed login for '{username}'")
        raise AuthError("Invalid username or password")
    return user


def register_user(storage: BarStorage, username: str, password: str) -> UserRecord:
    """Create a bouncer account with no bar. Duplicate usernames raise ConflictError."""
    if storage.get_user_by_username(username):
        raise ConflictError("Username already exists")
    user = storage.create_user(username=username, password_hash=hash_password(password))
    logger.info(f"👤 Registered user '{username}' (id={user.id})")
    return user


def resolve_session(storage: BarStorage, sessions: SessionStore,
                    session_id: Optional[str]) -> RequestAuth:
    """Map a session cookie value to Authenticated or Anonymous."""
    if not session_id:
        return RequestAuth()
    user_id = sessions.get(session_id)
    if user_id is None:
        return RequestAuth()
    user = storage.get_user(user_id)
    if user is None:
        # Session outlived its user
        sessions.destroy(session_id)
        return RequestAuth()
    return RequestAuth(user=user, session_id=session_id)


def start_session(sessions: SessionStore, user: UserRecord,
                  previous_session_id: Optional[str] = None) -> str:
    """Issue a fresh session id, dropping any session the caller already had."""
    if previous_session_id:
        sessions.destroy(previous_session_id)
    session_id = sessions.create(user.id)
    logger.info(f"🔑 Session started for '{user.username}'")
    return session_id


def end_session(sessions: SessionStore, auth: RequestAuth) -> None:
    if auth.session_id:
        sessions.destroy(auth.session_id)
    if auth.user:
        logger.info(f"👋 Session ended for '{auth.user.username}'")
