"""Matching media items against repository catalog entries.

Entries are matched on cross-reference identifiers using a fixed rule
table. The first entry in catalog order that satisfies any rule wins.
Optionally, entries that publish no identifiers can be matched by name
using Jaro-Winkler similarity.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final

from strsimpy.jaro_winkler import JaroWinkler

from remote_artwork.core.normalization import normalize_name
from remote_artwork.types.catalog import CatalogEntry, ProviderIds
from remote_artwork.types.common import ItemType, MediaItem, ProviderIdType

logger = logging.getLogger(__name__)

_jarowinkler: Final = JaroWinkler()

DEFAULT_MIN_SIMILARITY: Final[float] = 0.9


@dataclass(frozen=True)
class MatchRule:
    """One identifier comparison.

    Attributes:
        scheme: Identifier scheme looked up on the media item
        field: ProviderIds attribute compared against
        item_types: Item types the rule applies to (None = all)
    """

    scheme: ProviderIdType
    field: str
    item_types: frozenset[ItemType] | None = None

    def applies_to(self, item_type: ItemType) -> bool:
        return self.item_types is None or item_type in self.item_types

    def matches(self, item: MediaItem, providers: ProviderIds) -> bool:
        if not self.applies_to(item.item_type):
            return False
        item_id = item.get_provider_id(self.scheme)
        entry_id = getattr(providers, self.field)
        if item_id is None or entry_id is None:
            return False
        return ids_equal(item_id, entry_id)


_MUSIC_RELEASE: Final = frozenset([ItemType.AUDIO, ItemType.MUSIC_ALBUM])

# Evaluated in order for every entry; the first satisfied rule wins.
MATCH_RULES: Final[tuple[MatchRule, ...]] = (
    MatchRule(ProviderIdType.ANILIST, "anilist"),
    MatchRule(ProviderIdType.IMDB, "imdb"),
    MatchRule(ProviderIdType.TMDB, "tmdb"),
    MatchRule(ProviderIdType.TVDB, "tvdb"),
    MatchRule(ProviderIdType.MUSICBRAINZ_RELEASE_GROUP, "musicbrainz", _MUSIC_RELEASE),
    MatchRule(
        ProviderIdType.MUSICBRAINZ_ALBUM_ARTIST, "musicbrainz", frozenset([ItemType.AUDIO])
    ),
    MatchRule(ProviderIdType.MUSICBRAINZ_ALBUM, "musicbrainz", _MUSIC_RELEASE),
    MatchRule(
        ProviderIdType.MUSICBRAINZ_ARTIST, "musicbrainz", frozenset([ItemType.MUSIC_ARTIST])
    ),
    MatchRule(ProviderIdType.MUSICBRAINZ_TRACK, "musicbrainz", frozenset([ItemType.AUDIO])),
)


def ids_equal(a: str, b: str) -> bool:
    """Compare two identifiers, ignoring case.

    Examples:
        >>> ids_equal("tt0111161", "TT0111161")
        True
        >>> ids_equal("603", " 603")
        False
    """
    return a.casefold() == b.casefold()


def match_entry(item: MediaItem, entry: CatalogEntry) -> MatchRule | None:
    """Find the first rule matching an entry.

    Returns:
        The winning rule, or None if the entry doesn't match
    """
    if entry.providers is None:
        return None
    for rule in MATCH_RULES:
        if rule.matches(item, entry.providers):
            return rule
    return None


def find_match(
    item: MediaItem,
    catalog: Iterable[CatalogEntry],
    name_threshold: float | None = None,
) -> CatalogEntry | None:
    """Find the catalog entry for a media item.

    Args:
        item: The media item to match
        catalog: Catalog entries in published order
        name_threshold: Minimum similarity for the name fallback, or None to
            only match on identifiers

    Returns:
        The first matching entry, or None if nothing matched
    """
    logger.debug("Looking at providers %s", dict(item.provider_ids))

    unidentified: list[CatalogEntry] = []
    for entry in catalog:
        if entry.providers is None or entry.providers.is_empty:
            logger.debug("Artwork %r has no providers", entry.name)
            unidentified.append(entry)
            continue

        rule = match_entry(item, entry)
        if rule is not None:
            logger.debug("Matched artwork %r on %s", entry.name, rule.scheme)
            return entry

    if name_threshold is not None and item.name and unidentified:
        names = [entry.name for entry in unidentified]
        best, score = find_best_match(item.name, names, name_threshold)
        if best is not None:
            logger.debug("Matched artwork %r by name (score %.3f)", best, score)
            return unidentified[names.index(best)]

    logger.debug("Could not find any providers")
    return None


def jaro_winkler_similarity(s1: str, s2: str) -> float:
    """Calculate the Jaro-Winkler similarity between two strings (0..1)."""
    return _jarowinkler.similarity(s1, s2)


def find_best_match(
    search_term: str,
    candidates: Sequence[str],
    min_similarity_score: float = DEFAULT_MIN_SIMILARITY,
) -> tuple[str | None, float]:
    """Find the best matching name from a list of candidates.

    Both the search term and candidates are normalized before comparison.
    Ties keep the earliest candidate.

    Returns:
        Tuple of (best_match_name, similarity_score) or (None, 0.0) if no
        candidate reaches min_similarity_score
    """
    if not candidates:
        return None, 0.0

    search_term_normalized = normalize_name(search_term)
    best_match: str | None = None
    best_score = 0.0

    for candidate in candidates:
        score = _jarowinkler.similarity(search_term_normalized, normalize_name(candidate))
        if score > best_score:
            best_score = score
            best_match = candidate
            if score == 1.0:
                break

    if best_match is not None and best_score >= min_similarity_score:
        return best_match, best_score

    return None, 0.0
