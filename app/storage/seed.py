# app/storage/seed.py
"""Demo data: four State Street bars in Madison and one manager per bar."""

from app.storage.base import BarStorage
from app.utils.passwords import hash_password
from app.utils.logger import get_logger

logger = get_logger(__name__)

MADISON_BARS = [
    {"name": "State Street Brats", "capacity": 200,
     "address": "603 State St, Madison, WI 53703",
     "latitude": "43.074673", "longitude": "-89.395989"},
    {"name": "Whiskey Jacks", "capacity": 150,
     "address": "552 State St, Madison, WI 53703",
     "latitude": "43.0748", "longitude": "-89.3947"},
    {"name": "The KK", "capacity": 180,
     "address": "124 W Gorham St, Madison, WI 53703",
     "latitude": "43.075631", "longitude": "-89.397142"},
    {"name": "Chasers", "capacity": 120,
     "address": "319 W Gorham St, Madison, WI 53703",
     "latitude": "43.074090", "longitude": "-89.393226"},
]

# bar_id refers to the position in MADISON_BARS (1-based), i.e. the seeded id
BAR_OWNERS = [
    {"username": "brats_manager", "password": "bratspass123", "bar_id": 1},
    {"username": "whiskey_manager", "password": "whiskeypass123", "bar_id": 2},
    {"username": "kk_manager", "password": "kkpass123", "bar_id": 3},
    {"username": "chasers_manager", "password": "chaserspass123", "bar_id": 4},
]


def seed_demo_data(storage: BarStorage) -> None:
    """Seed bars and managers into an empty store. No-op if bars already exist."""
    if storage.get_all_bars():
        logger.debug("Store already has bars - seeding skipped")
        return

    bar_ids = []
    for bar in MADISON_BARS:
        bar_ids.append(storage.add_bar(current_count=0, **bar).id)

    for owner in BAR_OWNERS:
        storage.create_user(
            username=owner["username"],
            password_hash=hash_password(owner["password"]),
            bar_id=bar_ids[owner["bar_id"] - 1],
            is_bouncer=True,
        )
    logger.info(f"🌱 Seeded {len(bar_ids)} bars and {len(BAR_OWNERS)} managers")
