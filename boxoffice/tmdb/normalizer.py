"""TMDB data normalizer.

Transforms raw TMDB API responses into the immutable records
used by the ranking pipeline.
"""

import logging
import math
from typing import Any

from boxoffice.tmdb.models import Candidate, Detail, DiscoverPage, Genre, WatchProvider
from boxoffice.tmdb.types import (
    TMDBDiscoverMovieData,
    TMDBDiscoverResponse,
    TMDBGenresResponse,
    TMDBMovieDetailData,
    TMDBProviderData,
    TMDBWatchProvidersResponse,
)

logger = logging.getLogger(__name__)


class TMDBNormalizer:
    """Normalizes TMDB API payloads.

    Malformed entries inside a list are skipped with a warning; a
    malformed top-level payload raises ``KeyError``/``TypeError`` for
    the client to map.
    """

    # Offer lists in priority order: subscription, rental, purchase
    OFFER_TYPES = ("flatrate", "rent", "buy")

    # -------------------------------------------------------------------------
    # Discovery
    # -------------------------------------------------------------------------

    def normalize_discover_page(self, raw: TMDBDiscoverResponse) -> DiscoverPage:
        """Normalize a discovery page.

        Args:
            raw: Raw /discover/movie response.

        Returns:
            Discover page with parsed candidates.
        """
        candidates = []
        for item in raw.get("results") or []:
            try:
                candidates.append(self.normalize_candidate(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed discover entry {item!r:.80}: {e}")

        page = int(raw.get("page") or 1)
        return DiscoverPage(
            page=page,
            total_pages=int(raw.get("total_pages") or page),
            candidates=candidates,
        )

    def normalize_candidate(self, raw: TMDBDiscoverMovieData) -> Candidate:
        """Normalize a single discovery entry.

        Args:
            raw: Raw discover result.

        Returns:
            Candidate record.
        """
        return Candidate(
            id=int(raw["id"]),
            title=self._clean_string(raw.get("title")),
            release_date=raw.get("release_date") or "",
            poster_path=raw.get("poster_path") or None,
            genre_ids=tuple(int(g) for g in raw.get("genre_ids") or []),
            popularity=self._to_float(raw.get("popularity")),
            overview=self._clean_string(raw.get("overview")),
        )

    # -------------------------------------------------------------------------
    # Detail
    # -------------------------------------------------------------------------

    def normalize_detail(self, raw: TMDBMovieDetailData) -> Detail:
        """Normalize a movie detail payload.

        Negative or missing revenue is treated as unknown (0).

        Args:
            raw: Raw /movie/{id} response.

        Returns:
            Detail record.
        """
        genres = tuple(
            g["name"] for g in raw.get("genres") or [] if isinstance(g, dict) and g.get("name")
        )
        return Detail(
            id=int(raw["id"]),
            title=self._clean_string(raw.get("title")),
            release_date=raw.get("release_date") or "",
            poster_path=raw.get("poster_path") or None,
            genres=genres,
            overview=self._clean_string(raw.get("overview")),
            revenue=max(int(raw.get("revenue") or 0), 0),
            runtime=raw.get("runtime") or None,
            vote_average=self._to_float(raw.get("vote_average")),
            vote_count=int(raw.get("vote_count") or 0),
        )

    # -------------------------------------------------------------------------
    # Watch providers
    # -------------------------------------------------------------------------

    def normalize_watch_providers(
        self,
        raw: TMDBWatchProvidersResponse,
        region: str,
    ) -> list[WatchProvider]:
        """Merge one region's offer lists into a unique provider list.

        Entries are taken from flatrate, then rent, then buy; the first
        occurrence of a provider ID wins.

        Args:
            raw: Raw /movie/{id}/watch/providers response.
            region: Region code to read.

        Returns:
            Deduplicated providers, possibly empty.
        """
        region_data = (raw.get("results") or {}).get(region) or {}
        offers = [region_data.get(offer_type) or [] for offer_type in self.OFFER_TYPES]
        return merge_provider_offers(offers)

    # -------------------------------------------------------------------------
    # Genres
    # -------------------------------------------------------------------------

    def normalize_genres(self, raw: TMDBGenresResponse) -> list[Genre]:
        """Normalize the genre reference list.

        Args:
            raw: Raw /genre/movie/list response.

        Returns:
            Genre entries with both id and name present.
        """
        genres = []
        for item in raw.get("genres") or []:
            if item.get("id") is None or not item.get("name"):
                continue
            genres.append(Genre(id=int(item["id"]), name=item["name"]))
        return genres

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _clean_string(value: Any) -> str:
        """Strip whitespace; None becomes an empty string."""
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _to_float(value: Any) -> float:
        """Convert to a finite float, defaulting to 0.0."""
        if value is None:
            return 0.0
        try:
            result = float(value)
        except (TypeError, ValueError):
            return 0.0
        return result if math.isfinite(result) else 0.0


def merge_provider_offers(offers: list[list[TMDBProviderData]]) -> list[WatchProvider]:
    """Merge offer lists in priority order, keeping first occurrence per ID.

    Args:
        offers: Offer lists, highest priority first.

    Returns:
        Providers in encounter order.
    """
    seen: set[int] = set()
    providers: list[WatchProvider] = []

    for offer_list in offers:
        for entry in offer_list:
            provider_id = entry.get("provider_id")
            if provider_id is None or provider_id in seen:
                continue
            seen.add(provider_id)
            providers.append(
                WatchProvider(
                    provider_id=int(provider_id),
                    name=entry.get("provider_name") or "",
                    logo_path=entry.get("logo_path") or None,
                )
            )

    return providers
