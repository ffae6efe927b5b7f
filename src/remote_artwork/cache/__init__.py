"""Cache backends for repository catalogs."""

from remote_artwork.cache.base import CacheBackend, NullCache
from remote_artwork.cache.memory import MemoryCache

__all__ = [
    "CacheBackend",
    "MemoryCache",
    "NullCache",
]
