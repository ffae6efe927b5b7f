"""Building image URLs from matched catalog entries."""

from __future__ import annotations

import logging

from remote_artwork.types.catalog import CatalogEntry
from remote_artwork.types.common import ImageType, RemoteImageInfo

logger = logging.getLogger(__name__)


def catalog_url(repository_url: str, image_type_key: str) -> str:
    """Get the catalog URL of a repository for an image type key.

    Examples:
        >>> catalog_url("https://example.org/art/", "movies")
        'https://example.org/art/movies.json'
    """
    return f"{repository_url.rstrip('/')}/{image_type_key}.json"


def image_url(
    repository_url: str,
    image_type_key: str,
    machine_name: str,
    image_type: ImageType,
    image: str,
) -> str:
    """Build the URL of a single image.

    Examples:
        >>> image_url("https://example.org/art/", "series", "myshow", ImageType.BACKDROP, "a.jpg")
        'https://example.org/art/series/myshow/backdrop.a.jpg'
    """
    base = repository_url.rstrip("/")
    return f"{base}/{image_type_key}/{machine_name}/{image_type.file_prefix}.{image}"


def build_image_infos(
    repository_url: str,
    image_type_key: str,
    entry: CatalogEntry | None,
) -> tuple[RemoteImageInfo, ...]:
    """Build image candidates for a matched catalog entry.

    Candidates are ordered backdrop, primary, thumb, logo; within a
    category they keep the catalog's order.

    Args:
        repository_url: Base URL of the repository the entry came from
        image_type_key: Image type key the catalog was fetched for
        entry: The matched entry, or None

    Returns:
        Image candidates (empty if there is no entry or it has no images)
    """
    if entry is None or entry.images is None:
        logger.debug("ArtworkImages is null")
        return ()

    return tuple(
        RemoteImageInfo(
            type=image_type,
            url=image_url(repository_url, image_type_key, entry.machine_name, image_type, image),
            repository=repository_url,
        )
        for image_type in ImageType
        for image in entry.images.for_type(image_type)
    )
