"""Process-wide service instances for FastAPI dependency injection.

The TMDB client and the genre cache live for the whole process; the
ranking itself is rebuilt on every request.
"""

from functools import lru_cache

from boxoffice.ranking import BoxOfficeRanker, GenreCache
from boxoffice.settings import settings
from boxoffice.tmdb import TMDBClient


@lru_cache(maxsize=1)
def get_tmdb_client() -> TMDBClient:
    """Get singleton TMDB client.

    Raises:
        ValueError: If TMDB_API_KEY is not configured.
    """
    return TMDBClient(settings.tmdb)


@lru_cache(maxsize=1)
def get_genre_cache() -> GenreCache:
    """Get singleton genre cache bound to the TMDB client."""
    return GenreCache(get_tmdb_client().fetch_genres)


def get_ranker() -> BoxOfficeRanker:
    """Build a ranker over the shared client and genre cache."""
    return BoxOfficeRanker(
        source=get_tmdb_client(),
        genre_cache=get_genre_cache(),
        image_base_url=settings.tmdb.image_base_url,
    )


async def close_services() -> None:
    """Close the shared HTTP client and reset singletons."""
    if get_tmdb_client.cache_info().currsize:
        await get_tmdb_client().aclose()
    get_tmdb_client.cache_clear()
    get_genre_cache.cache_clear()
