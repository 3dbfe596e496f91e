"""Pydantic schemas for ranking output.

``RankedMovie`` and ``BoxOfficeResult`` are frozen: a ranking is
built once per request and never mutated after return.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RevenueSource = Literal["reported", "estimated"]


class WatchProviderInfo(BaseModel):
    """Watch provider entry in a ranked movie."""

    model_config = ConfigDict(frozen=True)

    provider_id: int
    name: str
    logo_path: str | None = None
    logo_url: str | None = None


class RankedMovie(BaseModel):
    """Movie with its final box-office rank.

    Attributes:
        id: TMDB movie ID.
        title: Display title.
        box_office: Reported revenue (USD) or the popularity-based estimate.
        revenue_source: Whether ``box_office`` is reported or estimated.
        rank: 1-based dense rank.
        poster_url: Absolute poster URL, if a poster exists.
        release_date: Raw release date string.
        genres: Genre names.
        overview: Synopsis.
        watch_providers: Regional providers, possibly empty.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    box_office: int = Field(ge=0)
    revenue_source: RevenueSource
    rank: int = Field(ge=1)
    poster_url: str | None = None
    release_date: str = ""
    genres: list[str] = Field(default_factory=list)
    overview: str = ""
    watch_providers: list[WatchProviderInfo] = Field(default_factory=list)


class BoxOfficeResult(BaseModel):
    """Ranking for one calendar month."""

    model_config = ConfigDict(frozen=True)

    movies: list[RankedMovie] = Field(default_factory=list)
    year: int
    month: int
    note: str | None = Field(
        default=None,
        description="Advisory message when fewer than the full top list was found.",
    )
