"""Normalized upstream records.

Immutable values produced by the TMDB client and consumed by the
ranking pipeline. All of them are request-scoped.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Genre:
    """Genre reference entry."""

    id: int
    name: str


@dataclass(frozen=True)
class Candidate:
    """Movie reference from a discovery page, before enrichment.

    Attributes:
        id: TMDB movie ID.
        title: Display title.
        release_date: Raw release date string (YYYY-MM-DD).
        poster_path: TMDB poster path, if any.
        genre_ids: TMDB genre IDs.
        popularity: TMDB popularity score.
        overview: Synopsis from the discovery payload.
    """

    id: int
    title: str
    release_date: str = ""
    poster_path: str | None = None
    genre_ids: tuple[int, ...] = ()
    popularity: float = 0.0
    overview: str = ""


@dataclass(frozen=True)
class DiscoverPage:
    """One page of discovery results."""

    page: int
    total_pages: int
    candidates: list[Candidate] = field(default_factory=list)

    @property
    def has_more(self) -> bool:
        """Whether upstream reports pages after this one."""
        return self.page < self.total_pages


@dataclass(frozen=True)
class Detail:
    """Authoritative per-movie record.

    Attributes:
        revenue: Reported revenue in USD; 0 means unknown.
    """

    id: int
    title: str
    release_date: str = ""
    poster_path: str | None = None
    genres: tuple[str, ...] = ()
    overview: str = ""
    revenue: int = 0
    runtime: int | None = None
    vote_average: float = 0.0
    vote_count: int = 0

    @property
    def has_revenue(self) -> bool:
        """Whether a strictly positive revenue figure was reported."""
        return self.revenue > 0


@dataclass(frozen=True)
class WatchProvider:
    """Streaming/rental/purchase provider for one region."""

    provider_id: int
    name: str
    logo_path: str | None = None
