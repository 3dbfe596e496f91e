"""TMDB upstream package.

Classes:
    TMDBClient: Async HTTP client with per-call deadlines.
    TMDBNormalizer: Raw payload to record transformation.

Records:
    Candidate, DiscoverPage, Detail, WatchProvider, Genre.

Usage:
    from boxoffice.tmdb import TMDBClient

    async with TMDBClient() as client:
        page = await client.discover("2024-02-01", "2024-02-29", page=1)
"""

from boxoffice.tmdb.client import TMDBClient
from boxoffice.tmdb.models import Candidate, Detail, DiscoverPage, Genre, WatchProvider
from boxoffice.tmdb.normalizer import TMDBNormalizer, merge_provider_offers

__all__ = [
    "TMDBClient",
    "TMDBNormalizer",
    "merge_provider_offers",
    "Candidate",
    "Detail",
    "DiscoverPage",
    "Genre",
    "WatchProvider",
]
