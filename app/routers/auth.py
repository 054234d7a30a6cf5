# app/routers/auth.py
"""Manager accounts and cookie sessions: register, login, logout, whoami."""

from fastapi import APIRouter, Depends, Response, status

from app.config import Settings
from app.dependencies import get_auth, get_settings, get_storage, get_session_store, require_user
from app.schemas.user import UserCredentials, UserOut
from app.services import auth_service
from app.services.auth_service import RequestAuth
from app.services.session_store import SessionStore
from app.storage.base import BarStorage, UserRecord

router = APIRouter()


def _set_session_cookie(response: Response, settings: Settings, session_id: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED,
             summary="Create an account and log in")
def register(
    body: UserCredentials,
    response: Response,
    auth: RequestAuth = Depends(get_auth),
    storage: BarStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    user = auth_service.register_user(storage, body.username, body.password)
    session_id = auth_service.start_session(sessions, user, auth.session_id)
    _set_session_cookie(response, settings, session_id)
    return user


@router.post("/login", response_model=UserOut, summary="Log in with username + password")
def login(
    body: UserCredentials,
    response: Response,
    auth: RequestAuth = Depends(get_auth),
    storage: BarStorage = Depends(get_storage),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    user = auth_service.authenticate(storage, body.username, body.password)
    session_id = auth_service.start_session(sessions, user, auth.session_id)
    _set_session_cookie(response, settings, session_id)
    return user


@router.post("/logout", summary="End the current session")
def logout(
    response: Response,
    auth: RequestAuth = Depends(get_auth),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    auth_service.end_session(sessions, auth)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "logged_out"}


@router.get("/user", response_model=UserOut, summary="Current user")
def current_user(user: UserRecord = Depends(require_user)):
    return user
