"""Common type definitions used across the remote-artwork library.

These types describe the lookup input (a media item and its provider IDs)
and the lookup output (remote image candidates).
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field


@enum.unique
class ImageType(enum.StrEnum):
    """Image categories published by artwork repositories.

    Declaration order is the order in which candidates are emitted.
    """

    BACKDROP = "Backdrop"
    PRIMARY = "Primary"
    THUMB = "Thumb"
    LOGO = "Logo"

    @property
    def file_prefix(self) -> str:
        """Prefix used for image files of this category (e.g. "backdrop")."""
        return self.value.lower()


@enum.unique
class ItemType(enum.StrEnum):
    """Closed classification of media items used by the matching rules.

    Only the music kinds get type-conditional MusicBrainz rules; every other
    kind of item is GENERAL.
    """

    GENERAL = "General"
    AUDIO = "Audio"
    MUSIC_ALBUM = "MusicAlbum"
    MUSIC_ARTIST = "MusicArtist"

    @classmethod
    def parse(cls, value: str | ItemType | None) -> ItemType:
        """Map a host item type name to an ItemType.

        Unknown or missing names map to GENERAL.

        Examples:
            >>> ItemType.parse("musicalbum")
            <ItemType.MUSIC_ALBUM: 'MusicAlbum'>
            >>> ItemType.parse("Movie")
            <ItemType.GENERAL: 'General'>
        """
        if isinstance(value, ItemType):
            return value
        if not value:
            return cls.GENERAL
        wanted = value.casefold()
        for member in cls:
            if member.value.casefold() == wanted:
                return member
        return cls.GENERAL


@enum.unique
class ProviderIdType(enum.StrEnum):
    """Cross-reference identifier schemes understood by the matcher."""

    ANILIST = "AniList"
    IMDB = "IMDB"
    TMDB = "TMDB"
    TVDB = "TVDB"
    MUSICBRAINZ_RELEASE_GROUP = "MusicBrainz-ReleaseGroup"
    MUSICBRAINZ_ALBUM_ARTIST = "MusicBrainz-AlbumArtist"
    MUSICBRAINZ_ALBUM = "MusicBrainz-Album"
    MUSICBRAINZ_ARTIST = "MusicBrainz-Artist"
    MUSICBRAINZ_TRACK = "MusicBrainz-Track"


@dataclass
class MediaItem:
    """A media item to find artwork for.

    Attributes:
        item_type: Classification used by the type-conditional rules
        provider_ids: Mapping of identifier scheme name to identifier value
        name: Display name, only used by the optional name fallback
    """

    item_type: ItemType = ItemType.GENERAL
    provider_ids: Mapping[str, str] = field(default_factory=dict)
    name: str | None = None

    def __post_init__(self) -> None:
        self.item_type = ItemType.parse(self.item_type)
        # Scheme names are case-insensitive
        self._ids = {str(k).casefold(): v for k, v in self.provider_ids.items()}

    def get_provider_id(self, scheme: str | ProviderIdType) -> str | None:
        """Look up an identifier by scheme.

        Args:
            scheme: Identifier scheme (e.g. ProviderIdType.IMDB or "imdb")

        Returns:
            The identifier, or None if it is missing or blank
        """
        value = self._ids.get(str(scheme).casefold())
        if value is None:
            return None
        value = str(value)
        if not value.strip():
            return None
        return value

    @property
    def has_provider_ids(self) -> bool:
        """Check if the item carries at least one usable identifier."""
        return any(self.get_provider_id(key) for key in self._ids)


@dataclass(frozen=True)
class RemoteImageInfo:
    """A candidate image published by an artwork repository.

    Attributes:
        type: Image category the candidate belongs to
        url: Fully qualified image URL
        repository: Base URL of the repository that published it
    """

    type: ImageType
    url: str
    repository: str = ""
