# app/routers/bars.py
"""
Occupancy API - public reads + manager count updates.
GET   /bars             - every bar, seed order, no auth
GET   /bars/{id}        - one bar, no auth
PATCH /bars/{id}/count  - set current count, session required
GET   /occupancy        - bars with percent full + status label, no auth
"""

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from app.config import Settings
from app.dependencies import get_settings, get_storage, require_user
from app.errors import NotFoundError, ValidationError
from app.schemas.bar import BarOut, BarOccupancyOut, CountUpdate
from app.services import occupancy_service
from app.storage.base import BarStorage, UserRecord

router = APIRouter()


@router.get("/bars", response_model=list[BarOut], summary="List all bars")
def list_bars(storage: BarStorage = Depends(get_storage)):
    """Current count for every bar. Public viewers poll this."""
    return storage.get_all_bars()


@router.get("/bars/{bar_id}", response_model=BarOut, summary="Get one bar")
def get_bar(bar_id: int, storage: BarStorage = Depends(get_storage)):
    bar = storage.get_bar(bar_id)
    if not bar:
        raise NotFoundError("Bar not found")
    return bar


@router.patch("/bars/{bar_id}/count", response_model=BarOut, summary="Report a bar's headcount")
async def update_count(
    bar_id: int,
    request: Request,
    user: UserRecord = Depends(require_user),
    storage: BarStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    """
    Body: {"count": <int >= 0>}.
    Auth is checked before the body is even read, so an anonymous caller
    always gets 401 regardless of payload.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError(errors=[{"loc": ["body"], "msg": "Body must be valid JSON", "type": "json_invalid"}])

    try:
        body = CountUpdate.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)

    return await run_in_threadpool(
        occupancy_service.update_bar_count,
        storage, user, bar_id, body.count,
        settings.ENFORCE_BAR_OWNERSHIP, settings.BUSY_THRESHOLD,
    )


@router.get("/occupancy", response_model=list[BarOccupancyOut], summary="Bars with occupancy percent")
def get_occupancy(storage: BarStorage = Depends(get_storage),
                  settings: Settings = Depends(get_settings)):
    """Derived view: percent full and Open / Getting Full / At Capacity."""
    return [
        BarOccupancyOut(
            id=bar.id,
            name=bar.name,
            current_count=bar.current_count,
            capacity=bar.capacity,
            address=bar.address,
            latitude=bar.latitude,
            longitude=bar.longitude,
            occupancy_percent=occupancy_service.occupancy_percent(bar),
            status=occupancy_service.occupancy_status(bar, settings.BUSY_THRESHOLD),
        )
        for bar in storage.get_all_bars()
    ]
