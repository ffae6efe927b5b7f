"""Type definitions for remote-artwork."""

from remote_artwork.types.catalog import (
    ArtworkImages,
    CatalogEntry,
    ProviderIds,
    parse_catalog,
)
from remote_artwork.types.common import (
    ImageType,
    ItemType,
    MediaItem,
    ProviderIdType,
    RemoteImageInfo,
)

__all__ = [
    "ArtworkImages",
    "CatalogEntry",
    "ImageType",
    "ItemType",
    "MediaItem",
    "ProviderIdType",
    "ProviderIds",
    "RemoteImageInfo",
    "parse_catalog",
]
