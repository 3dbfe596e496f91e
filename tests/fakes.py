"""Fake TMDB backend and payload factories.

The fake is served through ``httpx.MockTransport`` so every layer
above the socket runs for real.
"""

import re
from typing import Any

import httpx

BASE_URL = "https://api.themoviedb.org/3"
IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

SAMPLE_GENRES = [
    {"id": 28, "name": "Action"},
    {"id": 18, "name": "Drama"},
    {"id": 27, "name": "Horror"},
    {"id": 35, "name": "Comedy"},
]


# ---------------------------------------------------------------------------
# Payload factories
# ---------------------------------------------------------------------------


def make_movie(movie_id: int, popularity: float = 10.0, **overrides: Any) -> dict[str, Any]:
    """Build a /discover/movie result entry."""
    movie = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "release_date": "2024-02-14",
        "poster_path": f"/poster{movie_id}.jpg",
        "genre_ids": [28, 18],
        "popularity": popularity,
        "overview": f"Overview {movie_id}",
    }
    movie.update(overrides)
    return movie


def make_page(movies: list[dict[str, Any]], page: int = 1, total_pages: int = 5) -> dict[str, Any]:
    """Build a /discover/movie response."""
    return {
        "page": page,
        "results": movies,
        "total_pages": total_pages,
        "total_results": total_pages * 20,
    }


def make_detail(movie_id: int, revenue: int = 0, **overrides: Any) -> dict[str, Any]:
    """Build a /movie/{id} response."""
    detail = {
        "id": movie_id,
        "title": f"Movie {movie_id}",
        "release_date": "2024-02-14",
        "poster_path": f"/poster{movie_id}.jpg",
        "genres": [{"id": 28, "name": "Action"}],
        "overview": f"Detailed overview {movie_id}",
        "revenue": revenue,
        "runtime": 120,
        "vote_average": 7.1,
        "vote_count": 1500,
    }
    detail.update(overrides)
    return detail


def make_providers(
    movie_id: int,
    region: str = "US",
    flatrate: list[tuple[int, str]] | None = None,
    rent: list[tuple[int, str]] | None = None,
    buy: list[tuple[int, str]] | None = None,
) -> dict[str, Any]:
    """Build a /movie/{id}/watch/providers response."""

    def entries(items: list[tuple[int, str]] | None) -> list[dict[str, Any]]:
        return [
            {"provider_id": pid, "provider_name": name, "logo_path": f"/logo{pid}.png"}
            for pid, name in items or []
        ]

    region_data: dict[str, Any] = {"link": f"https://www.themoviedb.org/movie/{movie_id}/watch"}
    for key, items in (("flatrate", flatrate), ("rent", rent), ("buy", buy)):
        if items:
            region_data[key] = entries(items)
    return {"id": movie_id, "results": {region: region_data}}


# ---------------------------------------------------------------------------
# Fake TMDB backend
# ---------------------------------------------------------------------------

Reply = dict[str, Any] | int | Exception

_DISCOVER = re.compile(r"/discover/movie$")
_PROVIDERS = re.compile(r"/movie/(\d+)/watch/providers$")
_DETAIL = re.compile(r"/movie/(\d+)$")
_GENRES = re.compile(r"/genre/movie/list$")


class FakeTMDB:
    """Programmable TMDB stand-in recording every request.

    Replies are a JSON dict (200), an int status code, or an exception
    to raise from the transport.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.pages: dict[int, Reply] = {}
        self.details: dict[int, Reply] = {}
        self.providers: dict[int, Reply] = {}
        self.genres: Reply = {"genres": SAMPLE_GENRES}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if _DISCOVER.search(path):
            page = int(request.url.params.get("page", "1"))
            reply = self.pages.get(page, make_page([], page=page, total_pages=page))
        elif match := _PROVIDERS.search(path):
            movie_id = int(match.group(1))
            reply = self.providers.get(movie_id, {"id": movie_id, "results": {}})
        elif match := _DETAIL.search(path):
            reply = self.details.get(int(match.group(1)), 404)
        elif _GENRES.search(path):
            reply = self.genres
        else:
            reply = 404

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply, json={"status_message": "error"})
        return httpx.Response(200, json=reply)

    def paths(self, pattern: str = "") -> list[str]:
        """Requested paths containing ``pattern``."""
        return [r.url.path for r in self.requests if pattern in r.url.path]

    def discover_pages_requested(self) -> list[int]:
        return [
            int(r.url.params["page"]) for r in self.requests if _DISCOVER.search(r.url.path)
        ]

    def set_movies(
        self,
        page: int,
        movies: list[dict[str, Any]],
        total_pages: int = 5,
        revenue: dict[int, int] | None = None,
    ) -> None:
        """Register a discovery page and matching detail payloads."""
        self.pages[page] = make_page(movies, page=page, total_pages=total_pages)
        for movie in movies:
            self.details.setdefault(
                movie["id"],
                make_detail(movie["id"], revenue=(revenue or {}).get(movie["id"], 0)),
            )

