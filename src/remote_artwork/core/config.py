"""Configuration classes for the remote-artwork library."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from remote_artwork.core.exceptions import InvalidConfigurationError

# Catalogs are considered fresh for five minutes after a successful fetch
DEFAULT_CATALOG_TTL = 300

CACHE_BACKENDS = frozenset(["memory", "none"])

_TRUE_STRINGS = frozenset(["true", "yes", "on", "1"])
_FALSE_STRINGS = frozenset(["false", "no", "off", "0"])


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_bool(name: str, value: Any) -> bool:
    """Accept a real bool or one of the usual string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass
class RepositoryConfig:
    """Configuration for a single artwork repository.

    Attributes:
        url: Base URL of the repository; identifies it
        enabled: Whether this repository is queried
        name: Optional display name used in logs
    """

    url: str
    enabled: bool = True
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url.strip():
            raise InvalidConfigurationError("repository url must be a non-empty string")
        self.enabled = _parse_bool("enabled", self.enabled)
        if not isinstance(self.name, str):
            raise InvalidConfigurationError("repository name must be a string")

    @property
    def display_name(self) -> str:
        return self.name or self.url

    @classmethod
    def from_value(cls, value: str | dict[str, Any] | RepositoryConfig) -> RepositoryConfig:
        """Create a RepositoryConfig from a URL string or dictionary.

        Dictionary keys are matched case-insensitively, so the host's
        ``{"Url": "..."}`` shape is accepted as well.
        """
        if isinstance(value, RepositoryConfig):
            return value
        if isinstance(value, str):
            return cls(url=value)
        if isinstance(value, dict):
            data = {str(k).lower(): v for k, v in value.items()}
            if "url" not in data:
                raise InvalidConfigurationError("repository entry is missing 'url'")
            return cls(
                url=data["url"],
                enabled=data.get("enabled", True),
                name=data.get("name") or "",
            )
        raise InvalidConfigurationError(
            f"repository entry must be a string or mapping, got {type(value).__name__}"
        )


@dataclass
class CacheConfig:
    """Configuration for the catalog cache.

    Attributes:
        backend: Cache backend type ("memory" or "none")
        ttl: Time-to-live for cached catalogs in seconds
        max_size: Maximum number of catalogs held by the memory cache
    """

    backend: str = "memory"
    ttl: float = DEFAULT_CATALOG_TTL
    max_size: int = 1000

    def __post_init__(self) -> None:
        if not isinstance(self.backend, str) or self.backend not in CACHE_BACKENDS:
            raise InvalidConfigurationError(
                f"unknown cache backend '{self.backend}' (expected one of {sorted(CACHE_BACKENDS)})"
            )
        if not _is_number(self.ttl) or self.ttl <= 0:
            raise InvalidConfigurationError(
                "cache ttl must be a positive number (use backend 'none' to disable caching)"
            )
        if not _is_int(self.max_size) or self.max_size < 1:
            raise InvalidConfigurationError("cache max_size must be an integer of at least 1")


@dataclass
class ArtworkConfig:
    """Main configuration for the ArtworkClient.

    Attributes:
        repositories: Artwork repositories in query order
        cache: Catalog cache configuration
        timeout: HTTP request timeout in seconds
        max_concurrent_requests: Maximum repositories fetched at once
        user_agent: User agent string for HTTP requests
        name_match_threshold: Minimum name similarity (0..1) for matching
            entries that publish no identifiers. None disables name matching.
    """

    repositories: list[RepositoryConfig] = field(default_factory=list)
    cache: CacheConfig = field(default_factory=CacheConfig)
    timeout: float = 30
    max_concurrent_requests: int = 4
    user_agent: str = "remote-artwork/1.0"
    name_match_threshold: float | None = None

    def __post_init__(self) -> None:
        self.repositories = [RepositoryConfig.from_value(r) for r in self.repositories]
        if not isinstance(self.cache, CacheConfig):
            raise InvalidConfigurationError("cache must be a CacheConfig")
        if not _is_number(self.timeout) or self.timeout <= 0:
            raise InvalidConfigurationError("timeout must be a positive number")
        if not _is_int(self.max_concurrent_requests) or self.max_concurrent_requests < 1:
            raise InvalidConfigurationError(
                "max_concurrent_requests must be an integer of at least 1"
            )
        if not isinstance(self.user_agent, str) or not self.user_agent.strip():
            raise InvalidConfigurationError("user_agent must be a non-empty string")
        if self.name_match_threshold is not None and (
            not _is_number(self.name_match_threshold) or not 0 <= self.name_match_threshold <= 1
        ):
            raise InvalidConfigurationError("name_match_threshold must be between 0 and 1")

    @property
    def cache_ttl(self) -> float:
        return self.cache.ttl

    def get_enabled_repositories(self) -> list[RepositoryConfig]:
        """Get enabled repositories in configured order."""
        return [repo for repo in self.repositories if repo.enabled]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArtworkConfig:
        """Create an ArtworkConfig from a dictionary.

        Example:
            ArtworkConfig.from_dict({
                "repositories": ["https://example.org/art", {"url": "https://other.org"}],
                "cache": {"ttl": 600},
            })
        """
        kwargs: dict[str, Any] = {}

        # The host stores the list under "ArtworkRepos"
        repositories = data.get("repositories", data.get("ArtworkRepos"))
        if repositories is not None:
            if not isinstance(repositories, list):
                raise InvalidConfigurationError("repositories must be a list")
            kwargs["repositories"] = [RepositoryConfig.from_value(r) for r in repositories]

        if "cache" in data:
            if not isinstance(data["cache"], dict):
                raise InvalidConfigurationError("cache must be a mapping")
            try:
                kwargs["cache"] = CacheConfig(**data["cache"])
            except TypeError as e:
                raise InvalidConfigurationError(f"cache: {e}") from e

        for key in [
            "timeout",
            "max_concurrent_requests",
            "user_agent",
            "name_match_threshold",
        ]:
            if key in data:
                kwargs[key] = data[key]

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return asdict(self)
