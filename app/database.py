# app/database.py
"""
Database connection, session factory, and table creation for the SQL backend.
Uses SQLAlchemy; any URL it understands works (SQLite by default, PostgreSQL in
production). Only built when STORAGE_BACKEND=sql.
"""

import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def make_engine(database_url: str):
    """Build an engine. SQLite needs cross-thread access for FastAPI's threadpool."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            # One shared connection, otherwise every checkout gets an empty DB
            kwargs["poolclass"] = StaticPool
        else:
            db_path = make_url(database_url).database
            if db_path and os.path.dirname(db_path):
                os.makedirs(os.path.dirname(db_path), exist_ok=True)
        return create_engine(database_url, echo=False, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=10,
        max_overflow=20,
        echo=False,                  # Set True to log all SQL queries (debug only)
    )


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_tables(engine):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.bar import Bar     # noqa
    from app.models.user import User   # noqa

    Base.metadata.create_all(bind=engine)
