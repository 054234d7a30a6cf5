# app/storage/sql.py
"""
SQLAlchemy-backed store. Same contract as MemStorage; every call runs in its
own short session/transaction and hands back detached record snapshots.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.errors import ConflictError
from app.models.bar import Bar
from app.models.user import User
from app.storage.base import BarStorage, BarRecord, UserRecord
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _bar_record(bar: Bar) -> BarRecord:
    return BarRecord(id=bar.id, name=bar.name, current_count=bar.current_count,
                     capacity=bar.capacity, address=bar.address,
                     latitude=bar.latitude, longitude=bar.longitude)


def _user_record(user: User) -> UserRecord:
    return UserRecord(id=user.id, username=user.username, password_hash=user.password_hash,
                      is_bouncer=user.is_bouncer, bar_id=user.bar_id)


class SqlStorage(BarStorage):
    def __init__(self, session_factory):
        self._session_factory = session_factory

    # ── Users ─────────────────────────────────────────────────────────────
    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self._session_factory() as db:
            user = db.get(User, user_id)
            return _user_record(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self._session_factory() as db:
            user = db.query(User).filter(User.username == username).first()
            return _user_record(user) if user else None

    def create_user(self, username: str, password_hash: str,
                    bar_id: Optional[int] = None, is_bouncer: bool = True) -> UserRecord:
        with self._session_factory() as db:
            user = User(username=username, password_hash=password_hash,
                        is_bouncer=is_bouncer, bar_id=bar_id)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError(f"Username '{username}' already exists")
            return _user_record(user)

    # ── Bars ──────────────────────────────────────────────────────────────
    def get_all_bars(self) -> list[BarRecord]:
        with self._session_factory() as db:
            return [_bar_record(b) for b in db.query(Bar).order_by(Bar.id).all()]

    def get_bar(self, bar_id: int) -> Optional[BarRecord]:
        with self._session_factory() as db:
            bar = db.get(Bar, bar_id)
            return _bar_record(bar) if bar else None

    def add_bar(self, name: str, capacity: int, address: str, latitude: str,
                longitude: str, current_count: int = 0) -> BarRecord:
        with self._session_factory() as db:
            bar = Bar(name=name, capacity=capacity, address=address, latitude=latitude,
                      longitude=longitude, current_count=current_count)
            db.add(bar)
            db.commit()
            return _bar_record(bar)

    def update_bar_count(self, bar_id: int, count: int) -> Optional[BarRecord]:
        with self._session_factory() as db:
            bar = db.get(Bar, bar_id)
            if not bar:
                return None
            bar.current_count = count
            db.commit()
            return _bar_record(bar)

    def ping(self) -> bool:
        try:
            with self._session_factory() as db:
                db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            return False
