"""TMDB API data types.

TypedDict definitions for the raw payloads returned by the
discover, detail, watch-provider and genre endpoints.
"""

from typing import NotRequired, TypedDict


class TMDBGenreData(TypedDict):
    """Genre data from TMDB API."""

    id: int
    name: str


class TMDBGenresResponse(TypedDict):
    """Response of /genre/movie/list."""

    genres: list[TMDBGenreData]


class TMDBDiscoverMovieData(TypedDict):
    """Single movie entry in a /discover/movie page."""

    id: int
    title: str
    release_date: NotRequired[str]
    poster_path: NotRequired[str | None]
    genre_ids: NotRequired[list[int]]
    popularity: NotRequired[float]
    overview: NotRequired[str]


class TMDBDiscoverResponse(TypedDict):
    """Response of /discover/movie."""

    page: int
    results: list[TMDBDiscoverMovieData]
    total_pages: int
    total_results: int


class TMDBMovieDetailData(TypedDict):
    """Response of /movie/{id}."""

    id: int
    title: str
    release_date: NotRequired[str]
    poster_path: NotRequired[str | None]
    genres: NotRequired[list[TMDBGenreData]]
    overview: NotRequired[str | None]
    revenue: NotRequired[int | None]
    runtime: NotRequired[int | None]
    vote_average: NotRequired[float]
    vote_count: NotRequired[int]


class TMDBProviderData(TypedDict):
    """Single provider entry in a watch-provider offer list."""

    provider_id: int
    provider_name: str
    logo_path: NotRequired[str | None]
    display_priority: NotRequired[int]


class TMDBRegionProvidersData(TypedDict):
    """Offer lists for one region."""

    link: NotRequired[str]
    flatrate: NotRequired[list[TMDBProviderData]]
    rent: NotRequired[list[TMDBProviderData]]
    buy: NotRequired[list[TMDBProviderData]]


class TMDBWatchProvidersResponse(TypedDict):
    """Response of /movie/{id}/watch/providers."""

    id: int
    results: dict[str, TMDBRegionProvidersData]
