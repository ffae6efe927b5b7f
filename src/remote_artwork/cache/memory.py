"""In-memory cache backend implementation."""

from __future__ import annotations

import asyncio
import contextlib
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from remote_artwork.cache.base import CacheBackend


@dataclass
class CacheEntry:
    """A single cache entry with expiration."""

    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check if this entry has expired at time ``now``.

        An entry is stale from the moment its TTL elapses.
        """
        if self.expires_at is None:
            return False
        return now >= self.expires_at


class MemoryCache(CacheBackend):
    """In-memory LRU cache with TTL support.

    Entries are kept in an OrderedDict to maintain LRU order and expire
    once their TTL has elapsed. All access goes through an asyncio lock,
    so concurrent lookups can share one instance.

    Args:
        max_size: Maximum number of entries to store (default: 1000)
        default_ttl: Default TTL in seconds (default: 300)
        cleanup_interval: Interval for expired entry cleanup in seconds (default: 60)
        clock: Time source returning seconds (default: time.time)

    Example:
        cache = MemoryCache(max_size=100, default_ttl=300)
        await cache.set("https://example.org/art/movies.json", catalog)
        catalog = await cache.get("https://example.org/art/movies.json")
    """

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: float = 300,
        cleanup_interval: float = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl
        self._cleanup_interval = cleanup_interval
        self._clock = clock
        self._cleanup_task: asyncio.Task | None = None
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    async def _start_cleanup_task(self) -> None:
        """Start the background cleanup task if not running."""
        if self._cleanup_task is None or self._cleanup_task.done():
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def _cleanup_loop(self) -> None:
        """Periodically drop expired entries."""
        try:
            while True:
                await asyncio.sleep(self._cleanup_interval)
                await self._cleanup_expired()
        except asyncio.CancelledError:
            pass

    async def _cleanup_expired(self) -> None:
        async with self._lock:
            now = self._clock()
            expired_keys = [key for key, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._cache[key]

    def _evict_if_needed(self) -> None:
        while len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)

    async def get(self, key: str) -> Any | None:
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._misses += 1
                return None

            self._cache.move_to_end(key)
            self._hits += 1
            return entry.value

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        if ttl is None:
            ttl = self._default_ttl

        expires_at = self._clock() + ttl if ttl > 0 else None

        async with self._lock:
            if key in self._cache:
                del self._cache[key]
            else:
                self._evict_if_needed()

            self._cache[key] = CacheEntry(value=value, expires_at=expires_at)

        await self._start_cleanup_task()

    async def delete(self, key: str) -> bool:
        async with self._lock:
            if key in self._cache:
                del self._cache[key]
                return True
            return False

    async def exists(self, key: str) -> bool:
        async with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False

            if entry.is_expired(self._clock()):
                del self._cache[key]
                return False

            return True

    async def clear(self) -> None:
        async with self._lock:
            self._cache.clear()

    async def close(self) -> None:
        """Cancel the cleanup task and clear the cache."""
        if self._cleanup_task is not None:
            self._cleanup_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._cleanup_task
            self._cleanup_task = None
        await self.clear()

    @property
    def size(self) -> int:
        """Get the current number of entries in the cache."""
        return len(self._cache)

    async def get_stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with size, capacity, expired count, default TTL,
            hits and misses
        """
        async with self._lock:
            now = self._clock()
            expired_count = sum(1 for e in self._cache.values() if e.is_expired(now))
            return {
                "size": len(self._cache),
                "max_size": self._max_size,
                "expired_count": expired_count,
                "default_ttl": self._default_ttl,
                "hits": self._hits,
                "misses": self._misses,
            }
