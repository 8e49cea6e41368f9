# commodities_pulse/cache.py
# Purpose: In-memory TTL cache in front of the market-data provider.
# Why: Free-tier provider caps calls per minute; repeated API calls should be cheap.
# Pitfalls: Not persistent; resets if the process restarts. One instance per worker.

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from commodities_pulse.observability import CACHE_LOOKUPS

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    created_at: float
    ttl_s: float


class TTLCache:
    """
    Keyed store memoizing async producers for a caller-chosen TTL.

    Concurrent misses on one key share a single in-flight task, so the
    producer runs once no matter how many callers arrive while it is pending.
    Entries are overwritten on the next miss and never swept; with
    `max_entries` set, the least recently written entry is dropped first.
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._store: dict[str, CacheEntry] = {}
        self._inflight: dict[str, asyncio.Task] = {}
        self._max_entries = max_entries
        self._clock = clock

    def __len__(self) -> int:
        return len(self._store)

    async def get_or_compute(
        self, key: str, producer: Callable[[], Awaitable[T]], ttl_s: float
    ) -> T:
        op = key.split(":", 1)[0]
        entry = self._store.get(key)
        if entry is not None and self._clock() - entry.created_at < entry.ttl_s:
            CACHE_LOOKUPS.labels(op=op, result="hit").inc()
            return entry.data

        task = self._inflight.get(key)
        if task is None:
            CACHE_LOOKUPS.labels(op=op, result="miss").inc()
            logger.debug("cache miss", extra={"cache_key": key})
            task = asyncio.ensure_future(self._compute(key, producer, ttl_s))
            self._inflight[key] = task
            task.add_done_callback(lambda _t: self._inflight.pop(key, None))
        else:
            CACHE_LOOKUPS.labels(op=op, result="shared").inc()

        # shield: a cancelled caller must not cancel the computation others await
        return await asyncio.shield(task)

    async def _compute(self, key: str, producer: Callable[[], Awaitable[T]], ttl_s: float) -> T:
        data = await producer()
        self._put(key, data, ttl_s)
        return data

    def _put(self, key: str, data: Any, ttl_s: float) -> None:
        # re-insert so dict order tracks write recency
        self._store.pop(key, None)
        if self._max_entries is not None and len(self._store) >= self._max_entries:
            self._store.pop(next(iter(self._store)))
        self._store[key] = CacheEntry(data=data, created_at=self._clock(), ttl_s=ttl_s)

    def age_seconds(self, key: str) -> int | None:
        """Whole seconds since the entry was written; None if never written."""
        entry = self._store.get(key)
        if entry is None:
            return None
        return int(self._clock() - entry.created_at)
