"""Per-candidate enrichment.

Fetches the authoritative detail record and the regional watch providers
for each candidate, concurrently and in isolation: one candidate's failure
never aborts the batch.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

from boxoffice.exceptions import UpstreamError
from boxoffice.tmdb.models import Candidate, Detail, WatchProvider

logger = logging.getLogger(__name__)


class MovieSource(Protocol):
    """Upstream operations the enrichment step depends on."""

    async def fetch_detail(self, movie_id: int) -> Detail: ...

    async def fetch_watch_providers(self, movie_id: int) -> list[WatchProvider]: ...


@dataclass(frozen=True)
class EnrichedCandidate:
    """Outcome of enriching one candidate.

    Attributes:
        candidate: Original discovery entry.
        detail: Detail record, or None when the fetch failed.
        providers: Watch providers, possibly empty.
    """

    candidate: Candidate
    detail: Detail | None = None
    providers: list[WatchProvider] = field(default_factory=list)

    @property
    def has_detail(self) -> bool:
        """Whether the detail fetch succeeded."""
        return self.detail is not None


class Enricher:
    """Runs the detail + watch-provider fetch for candidates."""

    def __init__(self, source: MovieSource) -> None:
        """Initialize enricher.

        Args:
            source: Upstream client providing detail and provider lookups.
        """
        self._source = source

    async def enrich(self, candidate: Candidate) -> EnrichedCandidate:
        """Enrich a single candidate.

        Both sub-calls run concurrently and both complete (or fail)
        before this resolves.

        Args:
            candidate: Discovery entry.

        Returns:
            Enriched result; ``detail`` is None if the detail fetch failed.
        """
        detail_result, providers_result = await asyncio.gather(
            self._source.fetch_detail(candidate.id),
            self._source.fetch_watch_providers(candidate.id),
            return_exceptions=True,
        )

        detail: Detail | None = None
        if isinstance(detail_result, UpstreamError):
            logger.warning(
                f"No detail for movie {candidate.id} ({candidate.title}): {detail_result.code}"
            )
        elif isinstance(detail_result, Exception):
            logger.error(f"Detail lookup crashed for movie {candidate.id}: {detail_result!r}")
        elif isinstance(detail_result, BaseException):
            raise detail_result
        else:
            detail = detail_result

        providers: list[WatchProvider] = []
        if isinstance(providers_result, Exception):
            logger.error(f"Provider lookup crashed for movie {candidate.id}: {providers_result!r}")
        elif isinstance(providers_result, BaseException):
            raise providers_result
        else:
            providers = providers_result

        return EnrichedCandidate(candidate=candidate, detail=detail, providers=providers)

    async def enrich_all(self, candidates: list[Candidate]) -> list[EnrichedCandidate]:
        """Enrich all candidates concurrently.

        Args:
            candidates: Discovery entries, in encounter order.

        Returns:
            Results in the same order as ``candidates``.
        """
        if not candidates:
            return []

        results = await asyncio.gather(
            *(self.enrich(candidate) for candidate in candidates),
            return_exceptions=True,
        )

        enriched: list[EnrichedCandidate] = []
        for candidate, result in zip(candidates, results, strict=True):
            if isinstance(result, Exception):
                logger.error(f"Enrichment error for movie {candidate.id}: {result!r}")
                enriched.append(EnrichedCandidate(candidate=candidate))
            elif isinstance(result, BaseException):
                raise result
            else:
                enriched.append(result)

        return enriched
