"""Poster wall for the sign-in screen."""
from __future__ import annotations

import logging

from ..exceptions import error_message
from ..schemas import TopRatedPoster
from ..services import TmdbService
from ..services.tmdb_service import TOP_RATED_POSTERS_TIMEOUT

logger = logging.getLogger(__name__)


class TopRatedPostersState:
    """Fetches once with a deadline; any failure leaves an empty wall and an error."""

    def __init__(self, *, tmdb_service: TmdbService, timeout: float = TOP_RATED_POSTERS_TIMEOUT) -> None:
        self._tmdb = tmdb_service
        self.timeout = timeout
        self.posters: list[TopRatedPoster] = []
        self.is_loading = False
        self.error: str | None = None

    async def load(self) -> list[TopRatedPoster]:
        self.is_loading = True
        self.error = None
        try:
            self.posters = await self._tmdb.get_top_rated_posters(timeout=self.timeout)
        except Exception as exc:
            logger.error("Fetching top rated posters failed: %s", exc)
            self.error = error_message(exc, "Unknown error")
            self.posters = []
        finally:
            self.is_loading = False
        return self.posters


__all__ = ["TopRatedPostersState"]
