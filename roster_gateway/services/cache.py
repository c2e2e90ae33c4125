# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Time-bounded read-through cache over an async loader.

Concurrent misses share one in-flight refresh (single-flight). A failed
refresh is never cached: the previous entry stays as it was and the next
caller starts a new refresh. ``invalidate()`` forces the next ``get()``
to reload regardless of age.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

from roster_gateway.core.errors import ConfigurationError, FetchError
from roster_gateway.core.logging import get_logger
from roster_gateway.metrics.prometheus import (
    CACHE_INVALIDATIONS,
    CACHE_LOOKUPS,
    CACHE_REFRESH_FAILURES,
)
from roster_gateway.models.domain import CacheEntry

logger = get_logger(__name__)


def _retrieve_failure(task: asyncio.Task) -> None:
    # already logged by _refresh; marks it retrieved when no waiter is left
    if not task.cancelled():
        task.exception()


class TTLCache:
    """Single-entry TTL cache with single-flight refresh."""

    def __init__(
        self,
        name: str,
        loader: Callable[[], Awaitable[Any]],
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        on_refresh: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.name = name
        self.ttl_seconds = ttl_seconds
        self._loader = loader
        self._clock = clock
        self._on_refresh = on_refresh
        self._entry: Optional[CacheEntry] = None
        self._stale = False
        self._generation = 0
        self._inflight: Optional[asyncio.Task] = None

    # ── Read ──

    def peek(self) -> Optional[CacheEntry]:
        return self._entry

    def age(self) -> Optional[float]:
        entry = self._entry
        if entry is None:
            return None
        return self._clock() - entry.fetched_at

    def is_fresh(self) -> bool:
        entry = self._entry
        return (
            entry is not None
            and not self._stale
            and self._clock() - entry.fetched_at < self.ttl_seconds
        )

    async def get(self) -> Any:
        """Return the cached value, reloading it when stale or invalidated.

        Loader errors propagate unchanged to every caller waiting on the
        refresh that raised them.
        """
        if self.is_fresh():
            CACHE_LOOKUPS.labels(cache=self.name, result="hit").inc()
            return self._entry.value

        if self._inflight is None:
            CACHE_LOOKUPS.labels(cache=self.name, result="miss").inc()
            self._inflight = asyncio.create_task(self._refresh(self._generation))
            self._inflight.add_done_callback(_retrieve_failure)
        else:
            CACHE_LOOKUPS.labels(cache=self.name, result="coalesced").inc()

        # shielded: a caller that goes away must not cancel the shared refresh
        return await asyncio.shield(self._inflight)

    async def warm(self) -> None:
        """Best-effort load used at startup. Failures are logged, never raised."""
        try:
            await self.get()
        except (FetchError, ConfigurationError) as exc:
            logger.warning("Cache '%s' warm-up failed: %s", self.name, exc)
        except Exception:
            logger.exception("Cache '%s' warm-up failed unexpectedly", self.name)
        else:
            logger.info("Cache '%s' warmed", self.name)

    # ── Write ──

    def invalidate(self) -> None:
        """Force the next ``get()`` to reload.

        A refresh already in flight still answers its own waiters but its
        result is not published, since it may predate the change.
        """
        self._stale = True
        self._generation += 1
        self._inflight = None
        CACHE_INVALIDATIONS.labels(cache=self.name).inc()
        logger.info("Cache '%s' invalidated", self.name)

    async def _refresh(self, generation: int) -> Any:
        task = asyncio.current_task()
        try:
            value = await self._loader()
        except Exception as exc:
            CACHE_REFRESH_FAILURES.labels(cache=self.name).inc()
            logger.warning("Cache '%s' refresh failed, keeping previous entry: %s", self.name, exc)
            raise
        finally:
            if self._inflight is task:
                self._inflight = None

        if generation == self._generation:
            self._entry = CacheEntry(value=value, fetched_at=self._clock())
            self._stale = False
            if self._on_refresh is not None:
                self._on_refresh(value)
        return value
