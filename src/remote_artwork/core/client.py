"""ArtworkClient - Main entry point for the remote-artwork library."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from remote_artwork.cache.base import CacheBackend, NullCache
from remote_artwork.cache.memory import MemoryCache
from remote_artwork.core.config import ArtworkConfig, RepositoryConfig
from remote_artwork.core.images import build_image_infos, catalog_url
from remote_artwork.core.matching import find_match
from remote_artwork.repository.catalog import CatalogCache
from remote_artwork.types.common import ItemType, MediaItem, RemoteImageInfo

if TYPE_CHECKING:
    import httpx

    from remote_artwork.types.catalog import CatalogEntry

logger = logging.getLogger(__name__)


class ArtworkClient:
    """Resolve artwork for media items from the configured repositories.

    Every enabled repository is asked for its catalog of the requested
    image type key, the item is matched against that catalog and the
    matched entry's images are returned. Results are concatenated in
    configured repository order. A repository that can't be reached, or
    that has no entry for the item, contributes nothing.

    Example:
        from remote_artwork import ArtworkClient, ArtworkConfig, ItemType

        config = ArtworkConfig(repositories=["https://example.org/artwork"])

        async with ArtworkClient(config) as client:
            images = await client.get_image_infos(
                "movies", ItemType.GENERAL, {"TMDB": "603"}
            )
            for image in images:
                print(image.type, image.url)
    """

    def __init__(
        self,
        config: ArtworkConfig,
        cache: CacheBackend | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the ArtworkClient.

        Args:
            config: Repository list and client settings
            cache: Catalog cache backend (built from config.cache if None)
            http_client: HTTP client to use (created on demand if None)
        """
        self.config = config
        self._http_client = http_client
        self._owns_cache = cache is None
        if cache is None:
            cache = self._create_cache(config)
        self._catalogs = self._create_catalogs(config, cache)

    async def __aenter__(self) -> ArtworkClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @staticmethod
    def _create_cache(config: ArtworkConfig) -> CacheBackend:
        if config.cache.backend == "none":
            return NullCache()
        return MemoryCache(max_size=config.cache.max_size, default_ttl=config.cache.ttl)

    def _create_catalogs(self, config: ArtworkConfig, cache: CacheBackend) -> CatalogCache:
        return CatalogCache(
            http_client=self._http_client,
            cache=cache,
            ttl=config.cache_ttl,
            timeout=config.timeout,
            user_agent=config.user_agent,
        )

    @property
    def catalogs(self) -> CatalogCache:
        return self._catalogs

    def list_repositories(self) -> list[str]:
        """Get enabled repository URLs in query order."""
        return [repo.url for repo in self.config.get_enabled_repositories()]

    async def reload(self, config: ArtworkConfig) -> None:
        """Switch to a new configuration.

        The catalog cache is rebuilt from the new settings and cached
        catalogs are dropped, so the new repository list is read fresh.
        An HTTP client owned by this instance is recreated with the new
        timeout and user agent. An injected HTTP client or cache backend
        is kept as is; ``timeout`` and ``user_agent`` then stay whatever
        that client was built with, and the backend is only cleared.
        """
        logger.debug(
            "Reloading configuration: %d repositories", len(config.get_enabled_repositories())
        )
        old_catalogs = self._catalogs
        if self._owns_cache:
            cache = self._create_cache(config)
        else:
            cache = old_catalogs.cache
            await cache.clear()

        self.config = config
        self._catalogs = self._create_catalogs(config, cache)

        await old_catalogs.close()
        if self._owns_cache:
            await old_catalogs.cache.close()

    async def get_match(
        self,
        image_type_key: str,
        item: MediaItem,
        repository: RepositoryConfig | str,
    ) -> CatalogEntry | None:
        """Find the catalog entry for an item in a single repository.

        Args:
            image_type_key: Catalog to look in (e.g. "movies", "series")
            item: The media item
            repository: Repository config or base URL

        Returns:
            The matched entry, or None
        """
        repository = RepositoryConfig.from_value(repository)
        catalog = await self._catalogs.fetch_catalog(catalog_url(repository.url, image_type_key))
        return find_match(item, catalog, self.config.name_match_threshold)

    async def _lookup_repository(
        self,
        repository: RepositoryConfig,
        image_type_key: str,
        item: MediaItem,
        semaphore: asyncio.Semaphore,
    ) -> tuple[RemoteImageInfo, ...]:
        async with semaphore:
            logger.debug(
                "Looking up %s in %s (%s)", image_type_key, repository.display_name, item.item_type
            )
            try:
                entry = await self.get_match(image_type_key, item, repository)
                images = build_image_infos(repository.url, image_type_key, entry)
            except Exception as e:
                logger.warning(
                    "Lookup in %s failed: %s: %s", repository.display_name, type(e).__name__, e
                )
                return ()

            logger.debug("%s returned %d images", repository.display_name, len(images))
            return images

    async def get_images_for_item(
        self,
        image_type_key: str,
        item: MediaItem,
    ) -> list[RemoteImageInfo]:
        """Get image candidates for an item from every enabled repository.

        Args:
            image_type_key: Catalog to look in (e.g. "movies", "series")
            item: The media item

        Returns:
            Candidates grouped by repository in configured order, each group
            ordered backdrop, primary, thumb, logo
        """
        repositories = self.config.get_enabled_repositories()
        if not repositories:
            logger.debug("No artwork repositories configured")
            return []

        semaphore = asyncio.Semaphore(self.config.max_concurrent_requests)
        # gather keeps argument order, whatever order the fetches finish in
        results = await asyncio.gather(
            *(
                self._lookup_repository(repository, image_type_key, item, semaphore)
                for repository in repositories
            )
        )

        images: list[RemoteImageInfo] = []
        for repository_images in results:
            images.extend(repository_images)
        return images

    async def get_image_infos(
        self,
        image_type_key: str,
        item_type: ItemType | str,
        provider_ids: Mapping[str, str],
        name: str | None = None,
    ) -> list[RemoteImageInfo]:
        """Get image candidates for an item described by its provider IDs.

        Args:
            image_type_key: Catalog to look in (e.g. "movies", "series")
            item_type: Item classification used by the MusicBrainz rules
            provider_ids: Identifier scheme name to value (e.g. {"IMDB": "tt0133093"})
            name: Item name, only used when name matching is enabled

        Returns:
            Image candidates from all repositories
        """
        item = MediaItem(item_type=ItemType.parse(item_type), provider_ids=provider_ids, name=name)
        return await self.get_images_for_item(image_type_key, item)

    async def close(self) -> None:
        """Close the HTTP client and, if created here, the cache."""
        await self._catalogs.close()
        if self._owns_cache:
            await self._catalogs.cache.close()
