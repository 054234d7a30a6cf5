# app/dependencies.py
"""
FastAPI dependencies. The store, session store and settings are created once
in create_app() and kept on app.state; handlers get them injected from here.
"""

from fastapi import Depends, Request

from app.config import Settings
from app.errors import AuthError
from app.services.auth_service import RequestAuth, resolve_session
from app.services.session_store import SessionStore
from app.storage.base import BarStorage, UserRecord


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> BarStorage:
    return request.app.state.storage


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_auth(
    request: Request,
    storage: BarStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> RequestAuth:
    return resolve_session(storage, sessions, request.cookies.get(settings.SESSION_COOKIE_NAME))


def require_user(auth: RequestAuth = Depends(get_auth)) -> UserRecord:
    """401 unless the caller has a live session."""
    if not auth.is_authenticated():
        raise AuthError("Not authenticated")
    return auth.current_user()
