"""Monthly box-office ranking aggregator.

Orchestrates discovery paging, per-candidate enrichment, the fallback
revenue policy, sorting and rank assignment to produce a top-10 list
for one calendar month.

Known approximations:
    - Discovery is sorted by popularity and read for at most
      ``MAX_DISCOVER_PAGES`` pages, so an unpopular high-grossing movie
      on a later page can be missed.
    - Reported revenue and the popularity-based estimate share one
      numeric sort key. Reported figures outrank estimates in practice
      but not unconditionally.
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from boxoffice.exceptions import BoxOfficeError, ServerError, UpstreamError
from boxoffice.monitoring.metrics import RANKING_CANDIDATES, RANKINGS_TOTAL
from boxoffice.ranking.enrichment import EnrichedCandidate, Enricher, MovieSource
from boxoffice.ranking.genre_cache import GenreCache
from boxoffice.ranking.schemas import BoxOfficeResult, RankedMovie, RevenueSource, WatchProviderInfo
from boxoffice.ranking.validator import month_date_range, validate_date_input
from boxoffice.tmdb.models import Candidate, DiscoverPage

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

TOP_N = 10
"""Maximum number of ranked movies returned."""

MAX_DISCOVER_PAGES = 3
"""Upper bound on sequential discovery pages per request."""

FALLBACK_MULTIPLIER = 100_000
"""Popularity scale factor for the estimated box office."""


class DiscoverySource(MovieSource, Protocol):
    """Upstream operations the ranker depends on."""

    async def discover(self, start_date: str, end_date: str, page: int = 1) -> DiscoverPage: ...


# =============================================================================
# SCORING
# =============================================================================


@dataclass(frozen=True)
class ScoredEntry:
    """Enriched candidate with its sort key."""

    enriched: EnrichedCandidate
    box_office: int
    revenue_source: RevenueSource


def fallback_box_office(popularity: float) -> int:
    """Deterministic box-office estimate from a popularity score.

    Args:
        popularity: TMDB popularity score.

    Returns:
        ``floor(popularity * 100000)``, never negative; 0 for non-finite input.
    """
    estimate = popularity * FALLBACK_MULTIPLIER
    if not math.isfinite(estimate):
        return 0
    return max(math.floor(estimate), 0)


def score_entry(enriched: EnrichedCandidate) -> ScoredEntry:
    """Pick the reported revenue when positive, else the estimate."""
    detail = enriched.detail
    if detail is not None and detail.has_revenue:
        return ScoredEntry(enriched=enriched, box_office=detail.revenue, revenue_source="reported")
    return ScoredEntry(
        enriched=enriched,
        box_office=fallback_box_office(enriched.candidate.popularity),
        revenue_source="estimated",
    )


def rank_entries(entries: list[ScoredEntry], limit: int = TOP_N) -> list[tuple[int, ScoredEntry]]:
    """Sort by box office descending, truncate, and assign dense ranks.

    The sort is stable: ties keep their encounter order.

    Args:
        entries: Scored entries in discovery order.
        limit: Maximum entries to keep.

    Returns:
        ``(rank, entry)`` pairs with ranks ``1..len``.
    """
    ordered = sorted(entries, key=lambda e: e.box_office, reverse=True)[:limit]
    return [(position, entry) for position, entry in enumerate(ordered, start=1)]


def dedupe_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Drop repeated movie IDs, keeping the first occurrence."""
    unique: dict[int, Candidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.id, candidate)
    return list(unique.values())


# =============================================================================
# RANKER
# =============================================================================


class BoxOfficeRanker:
    """Builds the monthly top-10 box-office ranking.

    Attributes:
        genre_cache: Injected genre reference cache.
    """

    def __init__(
        self,
        source: DiscoverySource,
        genre_cache: GenreCache,
        image_base_url: str,
        enricher: Enricher | None = None,
    ) -> None:
        """Initialize ranker.

        Args:
            source: Upstream client (discover, detail, providers).
            genre_cache: Genre cache, loaded before enrichment fan-out.
            image_base_url: Base URL that poster/logo paths are appended to.
            enricher: Optional enrichment step; built from ``source`` if omitted.
        """
        self._source = source
        self.genre_cache = genre_cache
        self._image_base_url = image_base_url.rstrip("/")
        self._enricher = enricher or Enricher(source)

    async def get_top(self, year: int, month: int) -> BoxOfficeResult:
        """Rank the top-grossing movies released in a month.

        Args:
            year: Release year (1900 to current year).
            month: Release month (1-12).

        Returns:
            Ranking with at most ``TOP_N`` movies.

        Raises:
            ValidationError: On out-of-range input, before any network call.
            BoxOfficeError: When the first discovery page fails.
            ServerError: On any unclassified failure.
        """
        try:
            result = await self._build_ranking(year, month)
        except BoxOfficeError as e:
            RANKINGS_TOTAL.labels(outcome=e.code.value).inc()
            raise
        except Exception as e:
            logger.exception(f"Unexpected error ranking {year}-{month:02d}")
            RANKINGS_TOTAL.labels(outcome=ServerError.code.value).inc()
            raise ServerError() from e

        RANKINGS_TOTAL.labels(outcome="ok").inc()
        return result

    async def _build_ranking(self, year: int, month: int) -> BoxOfficeResult:
        validate_date_input(year, month)
        start_date, end_date = month_date_range(year, month)

        await self.genre_cache.ensure_loaded()

        candidates = await self._collect_candidates(start_date, end_date)
        RANKING_CANDIDATES.observe(len(candidates))

        enriched = await self._enricher.enrich_all(candidates)
        ranked = rank_entries([score_entry(e) for e in enriched])
        movies = [self._to_ranked_movie(rank, entry) for rank, entry in ranked]

        logger.info(
            f"Ranked {len(movies)} movies for {year}-{month:02d} "
            f"from {len(candidates)} candidates"
        )
        return BoxOfficeResult(
            movies=movies,
            year=year,
            month=month,
            note=self._build_note(len(movies), year, month),
        )

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    async def _collect_candidates(self, start_date: str, end_date: str) -> list[Candidate]:
        """Page through discovery until enough candidates are gathered.

        Stops once ``TOP_N`` unique candidates are seen, after
        ``MAX_DISCOVER_PAGES`` pages, or when upstream runs out of results.
        A failure on page 1 propagates; later failures end paging.
        """
        candidates: list[Candidate] = []
        page = 1

        while True:
            try:
                result = await self._source.discover(start_date, end_date, page)
            except UpstreamError as e:
                if page == 1:
                    raise
                logger.warning(
                    f"Discover page {page} failed ({e.code}); "
                    f"keeping {len(candidates)} candidates"
                )
                break

            candidates = dedupe_candidates(candidates + result.candidates)

            if (
                len(candidates) >= TOP_N
                or page >= MAX_DISCOVER_PAGES
                or not result.candidates
                or not result.has_more
            ):
                break
            page += 1

        return candidates

    # -------------------------------------------------------------------------
    # Output mapping
    # -------------------------------------------------------------------------

    def _to_ranked_movie(self, rank: int, entry: ScoredEntry) -> RankedMovie:
        candidate = entry.enriched.candidate
        detail = entry.enriched.detail

        genres = self.genre_cache.resolve_many(candidate.genre_ids)
        if not genres and detail is not None:
            genres = list(detail.genres)

        poster_path = candidate.poster_path or (detail.poster_path if detail else None)

        return RankedMovie(
            id=candidate.id,
            title=candidate.title or (detail.title if detail else ""),
            box_office=entry.box_office,
            revenue_source=entry.revenue_source,
            rank=rank,
            poster_url=self._image_url(poster_path),
            release_date=candidate.release_date or (detail.release_date if detail else ""),
            genres=genres,
            overview=(detail.overview if detail else "") or candidate.overview,
            watch_providers=[
                WatchProviderInfo(
                    provider_id=p.provider_id,
                    name=p.name,
                    logo_path=p.logo_path,
                    logo_url=self._image_url(p.logo_path),
                )
                for p in entry.enriched.providers
            ],
        )

    def _image_url(self, path: str | None) -> str | None:
        if not path:
            return None
        return f"{self._image_base_url}{path}"

    @staticmethod
    def _build_note(count: int, year: int, month: int) -> str | None:
        if count >= TOP_N:
            return None
        if count == 0:
            return f"No movies found for {year}-{month:02d}"
        return f"Only {count} movies found for {year}-{month:02d}"
