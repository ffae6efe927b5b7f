"""
remote-artwork: Artwork lookup for media libraries from remote artwork repositories.

A repository publishes one JSON catalog per image type key (movies, series,
music albums, ...). Items are matched against catalog entries by their
AniList, IMDB, TMDB, TVDB and MusicBrainz IDs, and the matched entry's
backdrop, primary, thumb and logo images are returned as URLs.

Example usage:
    from remote_artwork import ArtworkClient, ArtworkConfig, ItemType

    config = ArtworkConfig(
        repositories=["https://example.org/artwork"],
    )

    async with ArtworkClient(config) as client:
        images = await client.get_image_infos(
            "movies", ItemType.GENERAL, {"IMDB": "tt0133093"}
        )
        for image in images:
            print(image.type, image.url)
"""

from remote_artwork.cache import CacheBackend, MemoryCache, NullCache
from remote_artwork.core.client import ArtworkClient
from remote_artwork.core.config import ArtworkConfig, CacheConfig, RepositoryConfig
from remote_artwork.core.exceptions import (
    ArtworkError,
    CatalogParseError,
    InvalidConfigurationError,
    RepositoryConnectionError,
)
from remote_artwork.core.images import build_image_infos
from remote_artwork.core.matching import find_match
from remote_artwork.repository.catalog import CatalogCache
from remote_artwork.types.catalog import ArtworkImages, CatalogEntry, ProviderIds
from remote_artwork.types.common import (
    ImageType,
    ItemType,
    MediaItem,
    ProviderIdType,
    RemoteImageInfo,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "ArtworkClient",
    "ArtworkConfig",
    "CacheConfig",
    "RepositoryConfig",
    "CatalogCache",
    # Cache
    "CacheBackend",
    "MemoryCache",
    "NullCache",
    # Exceptions
    "ArtworkError",
    "CatalogParseError",
    "InvalidConfigurationError",
    "RepositoryConnectionError",
    # Matching
    "build_image_infos",
    "find_match",
    # Types
    "ArtworkImages",
    "CatalogEntry",
    "ImageType",
    "ItemType",
    "MediaItem",
    "ProviderIdType",
    "ProviderIds",
    "RemoteImageInfo",
]
