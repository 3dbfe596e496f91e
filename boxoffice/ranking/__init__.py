"""Box-office ranking pipeline.

Classes:
    BoxOfficeRanker: Orchestrates discovery, enrichment and ranking.
    Enricher: Concurrent detail + watch-provider fetch per candidate.
    GenreCache: Injectable genre ID to name cache.

Usage:
    from boxoffice.ranking import BoxOfficeRanker, GenreCache
    from boxoffice.tmdb import TMDBClient

    async with TMDBClient() as client:
        cache = GenreCache(client.fetch_genres)
        ranker = BoxOfficeRanker(client, cache, settings.tmdb.image_base_url)
        result = await ranker.get_top(2024, 2)
"""

from boxoffice.ranking.aggregator import (
    FALLBACK_MULTIPLIER,
    MAX_DISCOVER_PAGES,
    TOP_N,
    BoxOfficeRanker,
    fallback_box_office,
    rank_entries,
    score_entry,
)
from boxoffice.ranking.enrichment import EnrichedCandidate, Enricher
from boxoffice.ranking.genre_cache import GenreCache
from boxoffice.ranking.schemas import BoxOfficeResult, RankedMovie, WatchProviderInfo
from boxoffice.ranking.validator import month_date_range, parse_int_param, validate_date_input

__all__ = [
    "BoxOfficeRanker",
    "Enricher",
    "EnrichedCandidate",
    "GenreCache",
    "BoxOfficeResult",
    "RankedMovie",
    "WatchProviderInfo",
    "TOP_N",
    "MAX_DISCOVER_PAGES",
    "FALLBACK_MULTIPLIER",
    "fallback_box_office",
    "rank_entries",
    "score_entry",
    "month_date_range",
    "parse_int_param",
    "validate_date_input",
]
