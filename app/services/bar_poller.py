# app/services/bar_poller.py
"""
Public-view polling client.

There is no push channel: read-only viewers call GET /api/bars on a fixed
interval and show whatever came back last. A snapshot is allowed to be up to
one interval old; past that it is stale.

On transport errors the last good snapshot is kept and the next attempt is
delayed with exponential backoff (doubling, capped), then the normal interval
resumes after the first success.
"""

import asyncio
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from app.config import settings
from app.utils.logger import get_logger

logger = get_logger(__name__)

_MAX_BACKOFF_SECONDS = 60


@dataclass
class BarSnapshot:
    bars: list = field(default_factory=list)
    fetched_at: Optional[float] = None     # time.monotonic() of the last good fetch

    def get(self, bar_id: int) -> Optional[dict]:
        for bar in self.bars:
            if bar.get("id") == bar_id:
                return bar
        return None


class BarPoller:
    def __init__(self, base_url: str, interval_ms: int = None,
                 on_refresh: Optional[Callable[[BarSnapshot], None]] = None,
                 client: Optional[httpx.AsyncClient] = None, clock=time.monotonic):
        self.base_url = base_url.rstrip("/")
        if interval_ms is not None and interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = interval_ms if interval_ms is not None else settings.POLL_INTERVAL_MS
        self._fixed_interval = interval_ms is not None
        self.on_refresh = on_refresh
        self.snapshot = BarSnapshot()
        self.failures = 0
        self._client = client
        self._clock = clock

    @property
    def interval(self) -> float:
        return self.interval_ms / 1000

    def is_stale(self) -> bool:
        """True if there is no snapshot yet, or it is older than one interval."""
        if self.snapshot.fetched_at is None:
            return True
        return (self._clock() - self.snapshot.fetched_at) > self.interval

    def next_delay(self) -> float:
        """Seconds until the next poll: the interval, or backoff after failures."""
        if not self.failures:
            return self.interval
        return min(self.interval * (2 ** self.failures), max(self.interval, _MAX_BACKOFF_SECONDS))

    async def load_policy(self, client: httpx.AsyncClient) -> None:
        """Adopt the server's advertised poll interval, if it has one."""
        try:
            resp = await client.get(f"{self.base_url}/api/refresh-policy")
            resp.raise_for_status()
            interval_ms = int(resp.json()["pollIntervalMs"])
            if interval_ms <= 0:
                raise ValueError(f"pollIntervalMs must be positive, got {interval_ms}")
            self.interval_ms = interval_ms
            logger.info(f"🔄 Poll interval from server: {self.interval_ms}ms")
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Could not load refresh policy, keeping {self.interval_ms}ms: {e}")

    async def refresh(self, client: httpx.AsyncClient) -> bool:
        """One poll. Returns True on success; on failure the old snapshot stays."""
        try:
            resp = await client.get(f"{self.base_url}/api/bars")
            resp.raise_for_status()
            bars = resp.json()
        except httpx.HTTPStatusError as e:
            self.failures += 1
            logger.warning(f"⚠️  /api/bars returned HTTP {e.response.status_code}")
            return False
        except (httpx.HTTPError, ValueError) as e:
            self.failures += 1
            logger.warning(f"❌ Poll failed ({type(e).__name__}). Retry in {self.next_delay()}s")
            return False

        self.snapshot = BarSnapshot(bars=bars, fetched_at=self._clock())
        self.failures = 0
        logger.debug(f"📥 {len(bars)} bars refreshed")
        if self.on_refresh:
            self.on_refresh(self.snapshot)
        return True

    async def run(self, iterations: Optional[int] = None) -> None:
        """
        Poll until cancelled (or for `iterations` rounds).
        Uses the injected client if any, else opens its own.
        """
        if self._client is not None:
            await self._run(self._client, iterations)
            return
        async with httpx.AsyncClient(timeout=10) as client:
            await self._run(client, iterations)

    async def _run(self, client: httpx.AsyncClient, iterations: Optional[int]):
        if not self._fixed_interval:
            await self.load_policy(client)
        done = 0
        while iterations is None or done < iterations:
            await self.refresh(client)
            done += 1
            if iterations is not None and done >= iterations:
                break
            await asyncio.sleep(self.next_delay())
