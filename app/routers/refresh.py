# app/routers/refresh.py
"""Refresh policy for read-only clients: how often to poll /bars, how stale is acceptable."""

from fastapi import APIRouter, Depends

from app.config import Settings
from app.dependencies import get_settings
from app.schemas.bar import RefreshPolicyOut

router = APIRouter()


@router.get("/refresh-policy", response_model=RefreshPolicyOut, summary="Polling cadence for public viewers")
def get_refresh_policy(settings: Settings = Depends(get_settings)):
    # Staleness bound is one poll interval
    return RefreshPolicyOut(poll_interval_ms=settings.POLL_INTERVAL_MS,
                            stale_after_ms=settings.POLL_INTERVAL_MS)
