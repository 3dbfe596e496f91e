"""Shared pytest fixtures."""

import os
from collections.abc import AsyncGenerator

import httpx
import pytest

# Settings are a module-level singleton: the key must exist before import.
os.environ.setdefault("TMDB_API_KEY", "test_api_key_12345678901234567890")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")

from boxoffice.ranking import BoxOfficeRanker, GenreCache  # noqa: E402
from boxoffice.settings import TMDBSettings  # noqa: E402
from boxoffice.tmdb import TMDBClient  # noqa: E402
from tests.fakes import BASE_URL, IMAGE_BASE_URL, FakeTMDB  # noqa: E402


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmdb_settings() -> TMDBSettings:
    """TMDB settings isolated from the environment."""
    return TMDBSettings(
        TMDB_API_KEY="test_api_key_12345678901234567890",
        TMDB_BASE_URL=BASE_URL,
        TMDB_IMAGE_BASE_URL=IMAGE_BASE_URL,
        TMDB_WATCH_REGION="US",
        TMDB_REQUEST_TIMEOUT=10.0,
    )


@pytest.fixture
def fake_tmdb() -> FakeTMDB:
    """Empty fake TMDB backend."""
    return FakeTMDB()


@pytest.fixture
async def tmdb_client(
    fake_tmdb: FakeTMDB,
    tmdb_settings: TMDBSettings,
) -> AsyncGenerator[TMDBClient, None]:
    """TMDBClient wired to the fake backend."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_tmdb.handler)) as http:
        yield TMDBClient(tmdb_settings, http_client=http)


@pytest.fixture
def genre_cache(tmdb_client: TMDBClient) -> GenreCache:
    """Empty genre cache loading through the fake backend."""
    return GenreCache(tmdb_client.fetch_genres)


@pytest.fixture
def ranker(tmdb_client: TMDBClient, genre_cache: GenreCache) -> BoxOfficeRanker:
    """Ranker over the fake backend."""
    return BoxOfficeRanker(tmdb_client, genre_cache, IMAGE_BASE_URL)
