"""
Rate cache — time-boxed cache with in-flight request coalescing.

One instance per kind of data (fiat rate tables, crypto USD prices).
For any key there is at most one outstanding fetch at a time:

  1. live entry          -> returned immediately, no fetch
  2. fetch already running -> caller awaits that same fetch
  3. otherwise           -> start a fetch bounded by `timeout`

A fetch that fails, times out or returns None resolves every waiter with
None and is not cached, so the next call tries again. The in-flight slot is
cleared once the fetch settles either way.

Everything runs on one event loop; the dicts are only touched between
suspension points so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Hashable, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    expires_at: float
    value: V


class RateCache(Generic[K, V]):
    """TTL cache + single-flight registry for one kind of rate."""

    def __init__(
        self,
        name: str,
        ttl: float,
        timeout: float = DEFAULT_TIMEOUT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.name = name
        self.ttl = ttl
        self.timeout = timeout
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}
        self._in_flight: dict[K, asyncio.Task] = {}
        self._stats = {"hits": 0, "joins": 0, "fetches": 0, "failures": 0}

    def peek(self, key: K) -> V | None:
        """Live cached value, without fetching."""
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at > self._clock():
            return entry.value
        return None

    def is_in_flight(self, key: K) -> bool:
        return key in self._in_flight

    async def get_or_fetch(
        self,
        key: K,
        fetch: Callable[[K], Awaitable[V | None]],
    ) -> V | None:
        cached = self.peek(key)
        if cached is not None:
            self._stats["hits"] += 1
            logger.debug("%s cache hit for %s", self.name, key)
            return cached

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve(key, fetch))
            self._in_flight[key] = task
        else:
            self._stats["joins"] += 1
            logger.debug("%s joining in-flight fetch for %s", self.name, key)

        # cancelling one waiter leaves the shared fetch running
        return await asyncio.shield(task)

    async def _resolve(self, key: K, fetch: Callable[[K], Awaitable[V | None]]) -> V | None:
        self._stats["fetches"] += 1
        try:
            try:
                value = await asyncio.wait_for(fetch(key), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning("%s fetch for %s timed out after %.1fs", self.name, key, self.timeout)
                value = None
            except Exception as e:
                logger.warning("%s fetch for %s failed: %s", self.name, key, e)
                value = None

            if value is None:
                self._stats["failures"] += 1
                return None

            self._entries[key] = CacheEntry(expires_at=self._clock() + self.ttl, value=value)
            return value
        finally:
            self._in_flight.pop(key, None)

    def clear(self) -> None:
        """Drop cached entries. Fetches already running are left alone."""
        self._entries.clear()

    def get_stats(self) -> dict:
        return {
            "name": self.name,
            "ttl_seconds": self.ttl,
            "entries": len(self._entries),
            "in_flight": len(self._in_flight),
            **self._stats,
        }
