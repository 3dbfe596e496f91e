"""Async TMDB API client with per-call deadlines.

Handles HTTP communication with The Movie Database API:
authentication, a total deadline per call, and mapping of
transport failures and status codes to typed errors.
No retries are performed; a failed call fails once.
"""

import asyncio
import logging
import time
from types import TracebackType
from typing import Any

import httpx

from boxoffice.exceptions import (
    ExternalApiError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    UpstreamError,
    UpstreamTimeoutError,
)
from boxoffice.monitoring.metrics import UPSTREAM_REQUEST_DURATION, UPSTREAM_REQUESTS_TOTAL
from boxoffice.settings import TMDBSettings, settings
from boxoffice.tmdb.models import Detail, DiscoverPage, Genre, WatchProvider
from boxoffice.tmdb.normalizer import TMDBNormalizer

logger = logging.getLogger(__name__)


class TMDBClient:
    """Async HTTP client for the TMDB API.

    Use as an async context manager, or pass an existing
    ``httpx.AsyncClient`` whose lifetime the caller owns.

    Attributes:
        timeout: Total deadline per call, in seconds.
        watch_region: Region used for watch-provider lookups.
    """

    def __init__(
        self,
        config: TMDBSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize TMDB client.

        Args:
            config: TMDB settings; defaults to the global settings.
            http_client: Optional shared HTTP client.

        Raises:
            ValueError: If no API key is configured.
        """
        cfg = config or settings.tmdb
        if not cfg.api_key:
            raise ValueError("TMDB_API_KEY environment variable is required")

        self._base_url = cfg.base_url
        self._api_key = cfg.api_key
        self._language = cfg.language
        self._include_adult = cfg.include_adult
        self.timeout = cfg.request_timeout
        self.watch_region = cfg.watch_region

        self._normalizer = TMDBNormalizer()
        self._client = http_client
        self._owns_client = http_client is None

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "TMDBClient":
        """Enter context and create HTTP client if none was injected."""
        if self._client is None:
            self._client = self._build_http_client()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        """Exit context and close the HTTP client if owned."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def _build_http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )

    # -------------------------------------------------------------------------
    # HTTP Methods
    # -------------------------------------------------------------------------

    async def _get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        metric_label: str | None = None,
    ) -> dict[str, Any]:
        """Execute a GET request bounded by the call deadline.

        Args:
            endpoint: API endpoint path.
            params: Optional query parameters.
            metric_label: Low-cardinality endpoint name for metrics.

        Returns:
            JSON response as dictionary.

        Raises:
            UpstreamTimeoutError: When the deadline expires.
            NetworkError: On transport failures or unmapped statuses.
            NotFoundError: When resource not found (404).
            RateLimitError: When rate limit exceeded (429).
            ExternalApiError: On 401, 5xx or undecodable bodies.
        """
        if self._client is None:
            self._client = self._build_http_client()
            self._owns_client = True

        request_params: dict[str, Any] = {"api_key": self._api_key, "language": self._language}
        if params:
            request_params.update(params)

        url = f"{self._base_url}{endpoint}"
        label = metric_label or endpoint
        start = time.perf_counter()

        try:
            response = await asyncio.wait_for(
                self._client.get(url, params=request_params),
                timeout=self.timeout,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Request timeout: {endpoint}")
            UPSTREAM_REQUESTS_TOTAL.labels(endpoint=label, outcome="timeout").inc()
            raise UpstreamTimeoutError("Request timeout") from e
        except httpx.HTTPError as e:
            logger.warning(f"Network failure on {endpoint}: {e!r}")
            UPSTREAM_REQUESTS_TOTAL.labels(endpoint=label, outcome="network_error").inc()
            raise NetworkError("Network connection failed") from e
        finally:
            UPSTREAM_REQUEST_DURATION.labels(endpoint=label).observe(time.perf_counter() - start)

        try:
            data = self._handle_response(response, endpoint)
        except Exception:
            UPSTREAM_REQUESTS_TOTAL.labels(endpoint=label, outcome=str(response.status_code)).inc()
            raise

        UPSTREAM_REQUESTS_TOTAL.labels(endpoint=label, outcome="ok").inc()
        return data

    @staticmethod
    def _handle_response(
        response: httpx.Response,
        endpoint: str,
    ) -> dict[str, Any]:
        """Handle HTTP response and extract JSON.

        Args:
            response: HTTP response object.
            endpoint: API endpoint (for logging).

        Returns:
            JSON response as dictionary.

        Raises:
            ExternalApiError: Invalid API key (401), 5xx, or bad JSON.
            NotFoundError: When resource not found (404).
            RateLimitError: When rate limit exceeded (429).
            NetworkError: Any other non-2xx status.
        """
        status = response.status_code

        if 200 <= status < 300:
            try:
                data = response.json()
            except ValueError as e:
                logger.error(f"Malformed JSON from {endpoint}")
                raise ExternalApiError("Malformed response from external API") from e
            if not isinstance(data, dict):
                raise ExternalApiError("Malformed response from external API")
            return data

        if status == 401:
            logger.error(f"TMDB rejected credentials: {endpoint}")
            raise ExternalApiError("Invalid API key")

        if status == 404:
            raise NotFoundError("Resource not found")

        if status == 429:
            retry_after = response.headers.get("Retry-After", "unknown")
            logger.warning(f"Rate limited on {endpoint}. Retry after {retry_after}s")
            raise RateLimitError("Rate limit exceeded")

        if status >= 500:
            logger.error(f"TMDB API error {status}: {endpoint}")
            raise ExternalApiError("External API server error")

        logger.error(f"Unexpected TMDB status {status}: {endpoint}")
        raise NetworkError("Network error occurred")

    # -------------------------------------------------------------------------
    # API Endpoints
    # -------------------------------------------------------------------------

    async def discover(self, start_date: str, end_date: str, page: int = 1) -> DiscoverPage:
        """Discover movies released within a date range.

        Args:
            start_date: First release date, inclusive (YYYY-MM-DD).
            end_date: Last release date, inclusive (YYYY-MM-DD).
            page: Page number (1-based).

        Returns:
            Discover page sorted by popularity.
        """
        params: dict[str, Any] = {
            "primary_release_date.gte": start_date,
            "primary_release_date.lte": end_date,
            "sort_by": "popularity.desc",
            "include_adult": str(self._include_adult).lower(),
            "page": page,
        }
        raw = await self._get("/discover/movie", params, metric_label="discover")
        try:
            return self._normalizer.normalize_discover_page(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExternalApiError("Malformed response from external API") from e

    async def fetch_detail(self, movie_id: int) -> Detail:
        """Get detailed movie information.

        Args:
            movie_id: TMDB movie ID.

        Returns:
            Movie detail record.
        """
        raw = await self._get(f"/movie/{movie_id}", metric_label="detail")
        try:
            return self._normalizer.normalize_detail(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExternalApiError("Malformed response from external API") from e

    async def fetch_watch_providers(self, movie_id: int) -> list[WatchProvider]:
        """Get watch providers for the configured region.

        Provider data is supplementary: every failure yields an empty list.

        Args:
            movie_id: TMDB movie ID.

        Returns:
            Deduplicated providers, possibly empty.
        """
        try:
            raw = await self._get(f"/movie/{movie_id}/watch/providers", metric_label="watch_providers")
            return self._normalizer.normalize_watch_providers(raw, self.watch_region)
        except UpstreamError as e:
            logger.info(f"No watch providers for movie {movie_id}: {e.code}")
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed watch providers for movie {movie_id}: {e}")
        return []

    async def fetch_genres(self) -> list[Genre]:
        """Get the list of movie genres.

        Returns:
            Genre reference entries.
        """
        raw = await self._get("/genre/movie/list", metric_label="genres")
        try:
            return self._normalizer.normalize_genres(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExternalApiError("Malformed response from external API") from e
