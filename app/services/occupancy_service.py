# app/services/occupancy_service.py
"""
Occupancy updates and the derived occupancy view.
Counts are reported by hand by a bar's manager; the service overwrites the
stored count (last write wins) and logs when a bar gets busy.
"""

from app.errors import NotFoundError, ForbiddenError
from app.storage.base import BarStorage, BarRecord, UserRecord
from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

STATUS_OPEN = "Open"
STATUS_GETTING_FULL = "Getting Full"
STATUS_AT_CAPACITY = "At Capacity"


def occupancy_percent(bar: BarRecord) -> float:
    if not bar.capacity:
        return 0
    return round((bar.current_count / bar.capacity) * 100, 1)


def occupancy_status(bar: BarRecord, busy_threshold: float = None) -> str:
    threshold = settings.BUSY_THRESHOLD if busy_threshold is None else busy_threshold
    if not bar.capacity or bar.current_count >= bar.capacity:
        return STATUS_AT_CAPACITY
    if bar.current_count / bar.capacity >= threshold:
        return STATUS_GETTING_FULL
    return STATUS_OPEN


def update_bar_count(storage: BarStorage, user: UserRecord, bar_id: int, count: int,
                     enforce_ownership: bool = None, busy_threshold: float = None) -> BarRecord:
    """
    Set a bar's current count on behalf of an authenticated user.
    `count` must already be validated as a non-negative int.
    Raises NotFoundError for an unknown bar, ForbiddenError if the user
    does not manage it (when ownership is enforced).
    """
    if enforce_ownership is None:
        enforce_ownership = settings.ENFORCE_BAR_OWNERSHIP

    bar = storage.get_bar(bar_id)
    if not bar:
        raise NotFoundError("Bar not found")

    if enforce_ownership and user.bar_id != bar_id:
        logger.warning(f"'{user.username}' (bar={user.bar_id}) tried to update bar {bar_id}")
        raise ForbiddenError("You can only update the count for your own bar")

    previous_status = occupancy_status(bar, busy_threshold)
    updated = storage.update_bar_count(bar_id, count)
    if updated is None:
        # Removed between lookup and write
        raise NotFoundError("Bar not found")

    logger.info(f"[COUNT] {updated.name}: {bar.current_count} → {updated.current_count}/{updated.capacity} "
                f"by '{user.username}'")

    status = occupancy_status(updated, busy_threshold)
    if status != previous_status and status != STATUS_OPEN:
        logger.warning(f"[BUSY] {updated.name} is now '{status}' ({occupancy_percent(updated)}%)")
    return updated
