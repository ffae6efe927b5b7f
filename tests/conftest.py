"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from remote_artwork import ArtworkConfig, CacheConfig, RepositoryConfig
from remote_artwork.types.catalog import parse_catalog

FIXTURES_DIR = Path(__file__).parent.parent / "testdata" / "fixtures"

REPO_A = "https://art.example.org/repo"
REPO_B = "https://mirror.example.net/artwork/"


def load_fixture(category: str, filename: str) -> Any:
    """Load a fixture file from testdata/fixtures."""
    with open(FIXTURES_DIR / category / filename) as f:
        return json.load(f)


class FakeClock:
    """Manually advanced time source for TTL tests."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def movies_payload() -> list[dict[str, Any]]:
    return load_fixture("catalogs", "movies.json")


@pytest.fixture
def music_payload() -> list[dict[str, Any]]:
    return load_fixture("catalogs", "music.json")


@pytest.fixture
def movies_catalog(movies_payload):
    return parse_catalog(movies_payload)


@pytest.fixture
def music_catalog(music_payload):
    return parse_catalog(music_payload)


@pytest.fixture
def two_repo_config() -> ArtworkConfig:
    """Create a configuration with two repositories."""
    return ArtworkConfig(
        repositories=[RepositoryConfig(url=REPO_A), RepositoryConfig(url=REPO_B)],
        cache=CacheConfig(backend="memory", ttl=300, max_size=100),
        timeout=5,
    )
