"""Abstract base class for catalog cache backends."""

from __future__ import annotations

import abc
from typing import Any


class CacheBackend(abc.ABC):
    """Abstract base class for cache backends.

    Backends store parsed repository catalogs keyed by catalog URL. They
    are shared across concurrent lookups, so implementations must tolerate
    concurrent get and set calls for the same key.
    """

    @abc.abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve a value from the cache.

        Args:
            key: The cache key

        Returns:
            The cached value, or None if not found or expired
        """

    @abc.abstractmethod
    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value in the cache, replacing any previous value.

        Args:
            key: The cache key
            value: The value to cache
            ttl: Time-to-live in seconds (None uses the backend default)
        """

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a value from the cache.

        Returns:
            True if the key was deleted, False if it didn't exist
        """

    @abc.abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in the cache and hasn't expired."""

    @abc.abstractmethod
    async def clear(self) -> None:
        """Clear all entries from the cache."""

    async def close(self) -> None:
        """Release any resources held by the backend."""


class NullCache(CacheBackend):
    """A cache backend that doesn't cache anything.

    Every catalog lookup goes to the network. Useful for testing or
    disabling caching.
    """

    async def get(self, key: str) -> Any | None:
        return None

    async def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        pass

    async def delete(self, key: str) -> bool:
        return False

    async def exists(self, key: str) -> bool:
        return False

    async def clear(self) -> None:
        pass
