"""Fetching and caching repository catalogs."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from remote_artwork.cache.memory import MemoryCache
from remote_artwork.core.config import DEFAULT_CATALOG_TTL
from remote_artwork.core.exceptions import (
    CatalogParseError,
    InvalidConfigurationError,
    RepositoryConnectionError,
)
from remote_artwork.types.catalog import CatalogEntry, parse_catalog

if TYPE_CHECKING:
    from remote_artwork.cache.base import CacheBackend

CACHE_KEY_PREFIX = "catalog"


def _check_ttl(ttl: float) -> None:
    # Backends read a zero TTL as "never expire"
    if ttl <= 0:
        raise InvalidConfigurationError(f"catalog ttl must be positive, got {ttl}")


class CatalogCache:
    """Downloads repository catalogs and keeps them for a fixed TTL.

    A failed download or an unparseable response is logged and reported as
    an empty catalog; it is never cached, so the next lookup retries.

    Example:
        async with httpx.AsyncClient(timeout=10) as http:
            catalogs = CatalogCache(http_client=http)
            entries = await catalogs.fetch_catalog("https://example.org/art/movies.json")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        cache: CacheBackend | None = None,
        ttl: float = DEFAULT_CATALOG_TTL,
        timeout: float = 30,
        user_agent: str = "remote-artwork/1.0",
        logger: logging.Logger | None = None,
    ) -> None:
        _check_ttl(ttl)
        self._client = http_client
        self._owns_client = http_client is None
        self._owns_cache = cache is None
        self._cache = cache if cache is not None else MemoryCache(default_ttl=ttl)
        self._ttl = ttl
        self._timeout = timeout
        self._user_agent = user_agent
        self._logger = logger or logging.getLogger(__name__)

    @property
    def cache(self) -> CacheBackend:
        return self._cache

    @property
    def ttl(self) -> float:
        """Seconds a fetched catalog stays fresh."""
        return self._ttl

    @ttl.setter
    def ttl(self, value: float) -> None:
        _check_ttl(value)
        self._ttl = value

    def _cache_key(self, catalog_url: str) -> str:
        return f"{CACHE_KEY_PREFIX}:{catalog_url}"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self._user_agent},
                timeout=self._timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def _request(self, catalog_url: str) -> Any:
        """Download and decode a catalog body.

        Raises:
            RepositoryConnectionError: On transport errors, malformed URLs and
                non-2xx responses
            CatalogParseError: If the body is not JSON
        """
        client = await self._get_client()

        self._logger.debug("Artwork repository: GET %s", catalog_url)

        try:
            response = await client.get(catalog_url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RepositoryConnectionError(catalog_url, str(e) or type(e).__name__) from e

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogParseError(catalog_url, str(e)) from e

        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(
                "Artwork repository response:\n%s", json.dumps(data, indent=2, ensure_ascii=False)
            )

        return data

    async def fetch_catalog(self, catalog_url: str) -> tuple[CatalogEntry, ...]:
        """Get the catalog published at a URL.

        Args:
            catalog_url: Full catalog URL (``<base>/<key>.json``)

        Returns:
            Catalog entries in published order; empty if the repository
            could not be downloaded or parsed
        """
        key = self._cache_key(catalog_url)
        cached = await self._cache.get(key)
        if cached is not None:
            self._logger.debug("Catalog cache hit for %s", catalog_url)
            return cached

        try:
            data = await self._request(catalog_url)
            if data is None:
                self._logger.debug("Repository %s returned an empty body", catalog_url)
                return ()
            catalog = parse_catalog(data, catalog_url)
        except RepositoryConnectionError as e:
            self._logger.warning("Error downloading repo: %s", e)
            return ()
        except CatalogParseError as e:
            self._logger.warning("Error deserializing repo response: %s", e)
            return ()

        await self._cache.set(key, catalog, self._ttl)
        self._logger.debug("Cached %d catalog entries for %s", len(catalog), catalog_url)
        return catalog

    async def invalidate(self, catalog_url: str) -> bool:
        """Drop the cached catalog for a URL.

        Returns:
            True if a cached catalog was removed
        """
        return await self._cache.delete(self._cache_key(catalog_url))

    async def clear(self) -> None:
        await self._cache.clear()

    async def close(self) -> None:
        """Close the HTTP client if it was created here, then the cache."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
        if self._owns_cache:
            await self._cache.close()
