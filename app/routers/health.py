# app/routers/health.py
"""
System health check endpoint.
Returns status of backend + storage.
"""

from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from app.config import Settings
from app.dependencies import get_settings, get_storage
from app.storage.base import BarStorage

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(storage: BarStorage = Depends(get_storage),
                 settings: Settings = Depends(get_settings)):
    """
    Returns:
    - Backend status
    - Storage backend + reachability
    - Number of bars tracked
    """
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "storage": {"backend": settings.STORAGE_BACKEND, "status": "unknown"},
        "bars": 0,
    }

    if storage.ping():
        result["storage"]["status"] = "ok"
        result["bars"] = len(storage.get_all_bars())
    else:
        result["storage"]["status"] = "unreachable"
        result["status"] = "degraded"

    return result
