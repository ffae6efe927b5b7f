"""Repository catalog type definitions.

A repository publishes one catalog per image type key at
``<base>/<key>.json``. The body is a JSON array of entries::

    [
      {
        "Name": "The Matrix",
        "MachineName": "the-matrix",
        "Providers": {"Imdb": "tt0133093", "Tmdb": "603"},
        "ArtworkImages": {
          "Backdrop": ["1.jpg"], "Primary": ["1.png"], "Thumb": [], "Logo": []
        }
      }
    ]

Property names are matched case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

from remote_artwork.core.exceptions import CatalogParseError
from remote_artwork.types.common import ImageType


class ProvidersPayload(TypedDict):
    """Identifiers published for a catalog entry."""

    Imdb: NotRequired[str | None]
    Tmdb: NotRequired[str | None]
    Tvdb: NotRequired[str | None]
    Anilist: NotRequired[str | None]
    Musicbrainz: NotRequired[str | None]


class ArtworkImagesPayload(TypedDict):
    """Image file identifiers per category."""

    Backdrop: NotRequired[list[str] | None]
    Primary: NotRequired[list[str] | None]
    Thumb: NotRequired[list[str] | None]
    Logo: NotRequired[list[str] | None]


class CatalogEntryPayload(TypedDict):
    """A single catalog entry as published by a repository."""

    Name: NotRequired[str | None]
    MachineName: NotRequired[str | None]
    Providers: NotRequired[ProvidersPayload | None]
    ArtworkImages: NotRequired[ArtworkImagesPayload | None]


@dataclass(frozen=True)
class ProviderIds:
    """Cross-reference identifiers published by a catalog entry.

    MusicBrainz has a single published ID that is compared against the
    release group, album, album artist, artist and track IDs of an item.
    """

    imdb: str | None = None
    tmdb: str | None = None
    tvdb: str | None = None
    anilist: str | None = None
    musicbrainz: str | None = None

    @property
    def is_empty(self) -> bool:
        """Check if no identifier is published."""
        return not any((self.imdb, self.tmdb, self.tvdb, self.anilist, self.musicbrainz))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProviderIds:
        """Create ProviderIds from a ``Providers`` JSON object."""
        return cls(
            imdb=_get_str(data, "Imdb"),
            tmdb=_get_str(data, "Tmdb"),
            tvdb=_get_str(data, "Tvdb"),
            anilist=_get_str(data, "Anilist"),
            musicbrainz=_get_str(data, "Musicbrainz"),
        )


@dataclass(frozen=True)
class ArtworkImages:
    """Ordered image file identifiers for each image category."""

    backdrop: tuple[str, ...] = ()
    primary: tuple[str, ...] = ()
    thumb: tuple[str, ...] = ()
    logo: tuple[str, ...] = ()

    def for_type(self, image_type: ImageType) -> tuple[str, ...]:
        """Get the image file identifiers for a category."""
        return getattr(self, image_type.file_prefix)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ArtworkImages:
        """Create ArtworkImages from an ``ArtworkImages`` JSON object."""
        return cls(
            backdrop=_get_str_list(data, "Backdrop"),
            primary=_get_str_list(data, "Primary"),
            thumb=_get_str_list(data, "Thumb"),
            logo=_get_str_list(data, "Logo"),
        )


@dataclass(frozen=True)
class CatalogEntry:
    """One artwork record published by a repository.

    Attributes:
        name: Display name
        machine_name: Directory name used to build image URLs
        providers: Published identifiers (None if the entry has none)
        images: Published images (None if the entry has none)
    """

    name: str = ""
    machine_name: str = ""
    providers: ProviderIds | None = None
    images: ArtworkImages | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CatalogEntry:
        """Create a CatalogEntry from a JSON object."""
        providers = _get_object(data, "Providers")
        images = _get_object(data, "ArtworkImages")
        return cls(
            name=_get_str(data, "Name") or "",
            machine_name=_get_str(data, "MachineName") or "",
            providers=ProviderIds.from_dict(providers) if providers is not None else None,
            images=ArtworkImages.from_dict(images) if images is not None else None,
        )


def parse_catalog(data: Any, repository: str | None = None) -> tuple[CatalogEntry, ...]:
    """Parse a decoded catalog body.

    Args:
        data: Decoded JSON body
        repository: Catalog URL, used in error messages

    Returns:
        Catalog entries in published order

    Raises:
        CatalogParseError: If the body does not match the catalog schema
    """
    if not isinstance(data, list):
        raise CatalogParseError(repository, f"expected a JSON array, got {_json_type(data)}")

    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, Mapping):
            raise CatalogParseError(
                repository, f"entry {index}: expected an object, got {_json_type(item)}"
            )
        try:
            entries.append(CatalogEntry.from_dict(item))
        except (TypeError, ValueError) as e:
            raise CatalogParseError(repository, f"entry {index}: {e}") from e
    return tuple(entries)


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    """Case-insensitive property lookup."""
    if key in data:
        return data[key]
    wanted = key.casefold()
    for name, value in data.items():
        if isinstance(name, str) and name.casefold() == wanted:
            return value
    return None


def _get_str(data: Mapping[str, Any], key: str) -> str | None:
    value = _lookup(data, key)
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"'{key}' must be a string, got {_json_type(value)}")


def _get_object(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = _lookup(data, key)
    if value is None or isinstance(value, Mapping):
        return value
    raise TypeError(f"'{key}' must be an object, got {_json_type(value)}")


def _get_str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = _lookup(data, key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be an array, got {_json_type(value)}")
    for item in value:
        if not isinstance(item, str):
            raise TypeError(f"'{key}' must only contain strings, got {_json_type(item)}")
    return tuple(value)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__
