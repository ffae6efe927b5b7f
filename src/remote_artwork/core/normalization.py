"""Text normalization for comparing catalog entry names.

Only used by the optional name fallback of the matcher; identifier
matching compares raw values.
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from typing import Final

LEADING_ARTICLE_PATTERN: Final = re.compile(r"^(a|an|the)\b", re.IGNORECASE)
COMMA_ARTICLE_PATTERN: Final = re.compile(r",\s(a|an|the)\b(?=\s*[^\w\s]|$)", re.IGNORECASE)
YEAR_SUFFIX_PATTERN: Final = re.compile(r"\s*[\(\[]\d{4}[\)\]]\s*$")
NON_WORD_SPACE_PATTERN: Final = re.compile(r"[^\w\s]")
MULTIPLE_SPACE_PATTERN: Final = re.compile(r"\s+")


@lru_cache(maxsize=1024)
def normalize_name(name: str, remove_articles: bool = True) -> str:
    """Normalize a title for similarity comparison.

    Lowercases, turns underscores and dashes into spaces, drops a
    trailing release year, leading articles, punctuation and accents.

    Examples:
        >>> normalize_name("The Matrix (1999)")
        'matrix'
        >>> normalize_name("Amélie")
        'amelie'
        >>> normalize_name("spirited_away")
        'spirited away'
    """
    name = name.lower().replace("_", " ").replace("-", " ")
    name = YEAR_SUFFIX_PATTERN.sub("", name)

    if remove_articles:
        name = LEADING_ARTICLE_PATTERN.sub("", name)
        name = COMMA_ARTICLE_PATTERN.sub("", name)

    name = NON_WORD_SPACE_PATTERN.sub(" ", name)
    name = MULTIPLE_SPACE_PATTERN.sub(" ", name)

    if any(ord(c) > 127 for c in name):
        normalized = unicodedata.normalize("NFD", name)
        name = "".join(c for c in normalized if not unicodedata.combining(c))

    return name.strip()
