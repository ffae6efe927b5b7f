"""Core functionality for remote-artwork."""

from remote_artwork.core.client import ArtworkClient
from remote_artwork.core.config import ArtworkConfig, CacheConfig, RepositoryConfig
from remote_artwork.core.exceptions import (
    ArtworkError,
    CatalogParseError,
    InvalidConfigurationError,
    RepositoryConnectionError,
)
from remote_artwork.core.images import build_image_infos, catalog_url, image_url
from remote_artwork.core.matching import MATCH_RULES, find_best_match, find_match
from remote_artwork.core.normalization import normalize_name

__all__ = [
    "ArtworkClient",
    "ArtworkConfig",
    "CacheConfig",
    "RepositoryConfig",
    "ArtworkError",
    "CatalogParseError",
    "InvalidConfigurationError",
    "RepositoryConnectionError",
    "MATCH_RULES",
    "build_image_infos",
    "catalog_url",
    "image_url",
    "find_best_match",
    "find_match",
    "normalize_name",
]
