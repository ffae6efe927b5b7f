"""End-to-end tests for ArtworkClient."""

import asyncio

import httpx
import pytest
import respx

from conftest import REPO_A, REPO_B
from remote_artwork import (
    ArtworkClient,
    ArtworkConfig,
    CacheConfig,
    ImageType,
    ItemType,
    MediaItem,
    RepositoryConfig,
)
from remote_artwork.cache import MemoryCache, NullCache

REPO_A_MOVIES = f"{REPO_A}/movies.json"
REPO_B_MOVIES = "https://mirror.example.net/artwork/movies.json"


@pytest.fixture
async def client(two_repo_config):
    async with ArtworkClient(two_repo_config) as client:
        yield client


class TestGetImageInfos:
    """Tests for get_image_infos."""

    @respx.mock
    async def test_unreachable_repository_is_isolated(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))
        respx.get(REPO_B_MOVIES).mock(side_effect=httpx.ConnectError("unreachable"))

        images = await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})

        assert [(image.type, image.url) for image in images] == [
            (ImageType.BACKDROP, f"{REPO_A}/movies/the-matrix/backdrop.1.jpg"),
            (ImageType.BACKDROP, f"{REPO_A}/movies/the-matrix/backdrop.2.jpg"),
            (ImageType.PRIMARY, f"{REPO_A}/movies/the-matrix/primary.1.png"),
            (ImageType.THUMB, f"{REPO_A}/movies/the-matrix/thumb.1.jpg"),
            (ImageType.LOGO, f"{REPO_A}/movies/the-matrix/logo.1.png"),
        ]
        assert {image.repository for image in images} == {REPO_A}

    @respx.mock
    async def test_failed_first_repository(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(500))
        respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))

        images = await client.get_image_infos("movies", "Movie", {"IMDB": "tt0245429"})

        assert [image.url for image in images] == [
            "https://mirror.example.net/artwork/movies/spirited-away/backdrop.a.jpg",
            "https://mirror.example.net/artwork/movies/spirited-away/primary.b.jpg",
            "https://mirror.example.net/artwork/movies/spirited-away/thumb.c.jpg",
            "https://mirror.example.net/artwork/movies/spirited-away/logo.d.png",
        ]

    async def test_results_follow_repository_order(self, two_repo_config, movies_payload):
        async def handler(request):
            # The first repository answers last
            if str(request.url) == REPO_A_MOVIES:
                await asyncio.sleep(0.05)
            return httpx.Response(200, json=movies_payload)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            async with ArtworkClient(two_repo_config, http_client=http) as client:
                images = await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "278"})

        assert [image.repository for image in images] == [REPO_A, REPO_B]

    @respx.mock
    async def test_no_match_anywhere(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))
        respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(200, json=[]))

        assert await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "1"}) == []

    @respx.mock
    async def test_catalogs_are_cached_across_items(self, client, movies_payload):
        route_a = respx.get(REPO_A_MOVIES).mock(
            return_value=httpx.Response(200, json=movies_payload)
        )
        route_b = respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(404))

        await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})
        await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "278"})

        assert route_a.call_count == 1
        # Failures are retried on the next lookup
        assert route_b.call_count == 2

    @respx.mock
    async def test_music_artist(self, music_payload):
        respx.get(f"{REPO_A}/artists.json").mock(
            return_value=httpx.Response(200, json=music_payload)
        )
        config = ArtworkConfig(repositories=[REPO_A])

        async with ArtworkClient(config) as client:
            artist = await client.get_image_infos(
                "artists",
                ItemType.MUSIC_ARTIST,
                {"MusicBrainz-Artist": "a74b1b7f-71a5-4011-9441-d0b5e4122711"},
            )
            track = await client.get_image_infos(
                "artists",
                ItemType.AUDIO,
                {"MusicBrainz-Artist": "a74b1b7f-71a5-4011-9441-d0b5e4122711"},
            )

        assert [image.type for image in artist] == [
            ImageType.BACKDROP,
            ImageType.PRIMARY,
            ImageType.LOGO,
        ]
        assert track == []

    async def test_no_repositories(self):
        async with ArtworkClient(ArtworkConfig()) as client:
            assert await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"}) == []

    async def test_disabled_repository_is_skipped(self, movies_payload):
        config = ArtworkConfig(repositories=[RepositoryConfig(url=REPO_A, enabled=False)])

        with respx.mock(assert_all_called=False) as router:
            route = router.get(REPO_A_MOVIES).mock(
                return_value=httpx.Response(200, json=movies_payload)
            )
            async with ArtworkClient(config) as client:
                images = await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})

        assert images == []
        assert not route.called

    @respx.mock
    async def test_unexpected_error_is_isolated(self, client, movies_payload, monkeypatch):
        respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))

        original = client.get_match

        async def flaky_get_match(image_type_key, item, repository):
            if repository.url == REPO_A:
                raise RuntimeError("boom")
            return await original(image_type_key, item, repository)

        monkeypatch.setattr(client, "get_match", flaky_get_match)

        images = await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "278"})

        assert [image.repository for image in images] == [REPO_B]

    async def test_cancellation_propagates(self, two_repo_config):
        started = asyncio.Event()

        async def handler(request):
            started.set()
            await asyncio.Event().wait()
            return httpx.Response(200, json=[])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            async with ArtworkClient(two_repo_config, http_client=http) as client:
                task = asyncio.create_task(
                    client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})
                )
                await started.wait()
                task.cancel()

                with pytest.raises(asyncio.CancelledError):
                    await task

                assert client.catalogs.cache.size == 0


class TestClientHelpers:
    @respx.mock
    async def test_get_match(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))

        entry = await client.get_match(
            "movies", MediaItem(provider_ids={"IMDB": "TT0133093"}), REPO_A
        )

        assert entry.name == "The Matrix"

    @respx.mock
    async def test_name_fallback_from_config(self, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))
        config = ArtworkConfig(repositories=[REPO_A], name_match_threshold=0.9)

        async with ArtworkClient(config) as client:
            images = await client.get_image_infos(
                "movies", ItemType.GENERAL, {}, name="Unlisted Short Film"
            )

        assert [image.url for image in images] == [
            f"{REPO_A}/movies/unlisted-short-film/backdrop.1.jpg"
        ]

    @respx.mock
    async def test_reload_switches_repositories(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))
        respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(200, json=[]))
        other = respx.get("https://other.example.com/movies.json").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})
        await client.reload(ArtworkConfig(repositories=["https://other.example.com"]))

        assert client.list_repositories() == ["https://other.example.com"]
        assert await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"}) == []
        assert other.call_count == 1
        assert client.catalogs.cache.size == 1

    @respx.mock
    async def test_reload_applies_http_settings(self, client):
        route = respx.get("https://other.example.com/movies.json").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.reload(
            ArtworkConfig(
                repositories=["https://other.example.com"],
                user_agent="reloaded-agent/3.0",
                timeout=7,
            )
        )
        await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})

        request = route.calls.last.request
        assert request.headers["User-Agent"] == "reloaded-agent/3.0"
        assert request.extensions["timeout"]["read"] == 7

    @respx.mock
    async def test_reload_rebuilds_owned_cache(self, client, movies_payload):
        respx.get(REPO_A_MOVIES).mock(return_value=httpx.Response(200, json=movies_payload))
        respx.get(REPO_B_MOVIES).mock(return_value=httpx.Response(200, json=[]))

        old_cache = client.catalogs.cache
        await client.get_image_infos("movies", ItemType.GENERAL, {"TMDB": "603"})
        assert old_cache.size == 2

        await client.reload(
            ArtworkConfig(repositories=[REPO_A], cache=CacheConfig(ttl=60, max_size=1))
        )

        assert client.catalogs.cache is not old_cache
        assert old_cache.size == 0
        assert client.catalogs.ttl == 60
        assert (await client.catalogs.cache.get_stats())["max_size"] == 1

        await client.reload(ArtworkConfig(repositories=[REPO_A], cache=CacheConfig(backend="none")))
        assert isinstance(client.catalogs.cache, NullCache)

    async def test_reload_keeps_injected_cache(self, two_repo_config):
        cache = MemoryCache()
        await cache.set("catalog:stale", ())

        async with ArtworkClient(two_repo_config, cache=cache) as client:
            await client.reload(ArtworkConfig(repositories=[REPO_A], cache=CacheConfig(ttl=60)))

            assert client.catalogs.cache is cache
            assert client.catalogs.ttl == 60
            assert cache.size == 0

        await cache.close()
