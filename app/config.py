# app/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Storage ───────────────────────────────────────────────────────────
    STORAGE_BACKEND: str = "memory"     # memory | sql
    DATABASE_URL: str = "sqlite:///./data/barcount.db"
    SEED_DEMO_DATA: bool = True         # Seed the Madison bars + their managers

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 5000
    CORS_ORIGINS: list[str] = ["*"]

    # ── Sessions ──────────────────────────────────────────────────────────
    SESSION_COOKIE_NAME: str = "barcount.sid"
    SESSION_TTL_SECONDS: int = 86400    # 24h, same as the session store check period
    SESSION_COOKIE_SECURE: bool = False # Set True behind HTTPS

    # ── Authorization ─────────────────────────────────────────────────────
    ENFORCE_BAR_OWNERSHIP: bool = True  # Managers may only update their own bar

    # ── Occupancy ─────────────────────────────────────────────────────────
    BUSY_THRESHOLD: float = 0.80        # "Getting Full" from 80%
    POLL_INTERVAL_MS: int = 10000       # Public view refresh cadence

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = ""                   # Empty = <repo>/logs

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
