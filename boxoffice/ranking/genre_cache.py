"""Genre reference data cache.

Process-lifetime mapping from TMDB genre ID to display name,
owned by whoever constructs it and injected into the ranker.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping

from boxoffice.exceptions import UpstreamError
from boxoffice.tmdb.models import Genre

logger = logging.getLogger(__name__)

GenreLoader = Callable[[], Awaitable[list[Genre]]]


class GenreCache:
    """Lazily-populated genre ID to name mapping.

    Concurrent ``ensure_loaded`` calls share a single in-flight load.
    Load failures are logged and leave the cache empty, so a later
    call tries again. Entries are only ever added or overwritten.
    """

    def __init__(self, loader: GenreLoader | None = None) -> None:
        """Initialize an empty cache.

        Args:
            loader: Coroutine function returning the full genre list.
        """
        self._loader = loader
        self._genres: dict[int, str] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._genres)

    @property
    def is_loaded(self) -> bool:
        """Whether at least one genre is cached."""
        return bool(self._genres)

    def seed(self, genres: Mapping[int, str] | Iterable[Genre]) -> None:
        """Add entries without touching the network.

        Args:
            genres: Mapping of ID to name, or Genre records.
        """
        if isinstance(genres, Mapping):
            self._genres.update({int(k): v for k, v in genres.items()})
            return
        for genre in genres:
            self._genres[genre.id] = genre.name

    async def ensure_loaded(self) -> None:
        """Load the genre list once, if the cache is empty."""
        if self._genres or self._loader is None:
            return

        async with self._lock:
            if self._genres:
                return
            try:
                genres = await self._loader()
            except UpstreamError as e:
                logger.warning(f"Failed to load genres: {e.code}: {e.message}")
                return
            self.seed(genres)
            logger.info(f"Genre cache loaded: {len(self._genres)} genres")

    def resolve(self, genre_id: int) -> str | None:
        """Return the genre name, or None if unknown."""
        return self._genres.get(genre_id)

    def resolve_many(self, genre_ids: Iterable[int]) -> list[str]:
        """Resolve IDs in order, silently dropping unknown ones."""
        names = []
        for genre_id in genre_ids:
            name = self._genres.get(genre_id)
            if name:
                names.append(name)
        return names
