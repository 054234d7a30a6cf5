# Bar occupancy - storage backends
# create_storage() picks the backend from settings and seeds it when asked.

from app.storage.base import BarStorage, BarRecord, UserRecord   # noqa
from app.storage.memory import MemStorage                         # noqa
from app.storage.seed import seed_demo_data
from app.utils.logger import get_logger

logger = get_logger(__name__)


def create_storage(settings) -> BarStorage:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        storage = MemStorage()
    elif backend == "sql":
        from app.database import make_engine, make_session_factory, create_tables
        from app.storage.sql import SqlStorage

        engine = make_engine(settings.DATABASE_URL)
        create_tables(engine)
        storage = SqlStorage(make_session_factory(engine))
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}' (expected memory|sql)")

    logger.info(f"🗄️  Storage backend: {backend}")
    if settings.SEED_DEMO_DATA:
        seed_demo_data(storage)
    return storage
