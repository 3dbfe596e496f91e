"""Tests for per-candidate enrichment."""

import asyncio

import pytest

from boxoffice.exceptions import ExternalApiError, NotFoundError, UpstreamTimeoutError
from boxoffice.ranking.enrichment import EnrichedCandidate, Enricher
from boxoffice.tmdb.models import Candidate, Detail, WatchProvider


class StubSource:
    """In-memory movie source with per-ID failures and delays."""

    def __init__(self) -> None:
        self.detail_errors: dict[int, BaseException] = {}
        self.provider_errors: dict[int, BaseException] = {}
        self.delays: dict[int, float] = {}
        self.detail_calls: list[int] = []

    async def fetch_detail(self, movie_id: int) -> Detail:
        self.detail_calls.append(movie_id)
        await asyncio.sleep(self.delays.get(movie_id, 0))
        if movie_id in self.detail_errors:
            raise self.detail_errors[movie_id]
        return Detail(id=movie_id, title=f"Movie {movie_id}", revenue=movie_id * 1000)

    async def fetch_watch_providers(self, movie_id: int) -> list[WatchProvider]:
        if movie_id in self.provider_errors:
            raise self.provider_errors[movie_id]
        return [WatchProvider(provider_id=8, name="Netflix")]


def _candidates(*ids: int) -> list[Candidate]:
    return [Candidate(id=i, title=f"Movie {i}", popularity=float(i)) for i in ids]


@pytest.fixture()
def source() -> StubSource:
    return StubSource()


# =============================================================================
# SINGLE CANDIDATE
# =============================================================================


class TestEnrich:
    @staticmethod
    async def test_success(source: StubSource) -> None:
        result = await Enricher(source).enrich(_candidates(3)[0])
        assert result.has_detail
        assert result.detail.revenue == 3000
        assert [p.name for p in result.providers] == ["Netflix"]

    @staticmethod
    @pytest.mark.parametrize(
        "error", [NotFoundError(), UpstreamTimeoutError(), ExternalApiError(), RuntimeError("x")]
    )
    async def test_detail_failure_keeps_candidate(
        source: StubSource, error: BaseException
    ) -> None:
        source.detail_errors[3] = error
        result = await Enricher(source).enrich(_candidates(3)[0])
        assert result.detail is None
        assert not result.has_detail
        assert result.providers

    @staticmethod
    async def test_provider_failure_isolated(source: StubSource) -> None:
        source.provider_errors[3] = RuntimeError("boom")
        result = await Enricher(source).enrich(_candidates(3)[0])
        assert result.has_detail
        assert result.providers == []

    @staticmethod
    async def test_cancellation_propagates(source: StubSource) -> None:
        source.detail_errors[3] = asyncio.CancelledError()
        with pytest.raises(asyncio.CancelledError):
            await Enricher(source).enrich(_candidates(3)[0])


# =============================================================================
# BATCH
# =============================================================================


class TestEnrichAll:
    @staticmethod
    async def test_empty(source: StubSource) -> None:
        assert await Enricher(source).enrich_all([]) == []

    @staticmethod
    async def test_order_preserved(source: StubSource) -> None:
        """Slow lookups finishing last do not reorder results."""
        source.delays = {1: 0.03, 2: 0.0, 3: 0.01}
        results = await Enricher(source).enrich_all(_candidates(1, 2, 3))
        assert [r.candidate.id for r in results] == [1, 2, 3]

    @staticmethod
    async def test_partial_failure(source: StubSource) -> None:
        source.detail_errors[2] = NotFoundError()
        results = await Enricher(source).enrich_all(_candidates(1, 2, 3))
        assert [r.has_detail for r in results] == [True, False, True]

    @staticmethod
    async def test_fan_out_is_concurrent(source: StubSource) -> None:
        source.delays = {i: 0.05 for i in range(1, 11)}
        loop = asyncio.get_running_loop()
        start = loop.time()
        await Enricher(source).enrich_all(_candidates(*range(1, 11)))
        assert loop.time() - start < 0.4
        assert sorted(source.detail_calls) == list(range(1, 11))

    @staticmethod
    async def test_crashing_enrich_degrades(
        source: StubSource, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        enricher = Enricher(source)
        original = enricher.enrich

        async def flaky(candidate: Candidate) -> EnrichedCandidate:
            if candidate.id == 2:
                raise RuntimeError("unexpected")
            return await original(candidate)

        monkeypatch.setattr(enricher, "enrich", flaky)
        results = await enricher.enrich_all(_candidates(1, 2))
        assert results[1] == EnrichedCandidate(candidate=results[1].candidate)
        assert results[0].has_detail
