"""People who watched the same titles as the viewer recently."""
from __future__ import annotations

import logging

from ..exceptions import error_message
from ..schemas import PotentialMatch
from ..services import MatchesService

logger = logging.getLogger(__name__)

LOAD_ERROR = "Error al cargar los matches"


class MatchesState:
    def __init__(
        self,
        *,
        matches_service: MatchesService,
        max_days_ago: int = 10,
        min_rating: float | None = 2.5,
        limit: int = 20,
    ) -> None:
        self._matches = matches_service
        self.max_days_ago = max_days_ago
        self.min_rating = min_rating
        self.limit = limit
        self.matches: list[PotentialMatch] = []
        self.total = 0
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        self.loading = True
        self.error = None
        try:
            response = await self._matches.get_potential_matches(
                max_days_ago=self.max_days_ago,
                min_rating=self.min_rating,
                limit=self.limit,
            )
        except Exception as exc:
            logger.exception("Loading matches failed")
            self.error = error_message(exc, LOAD_ERROR)
            return
        finally:
            self.loading = False
        self.matches = response.matches
        self.total = response.total

    async def refresh(self) -> None:
        await self.load()


__all__ = ["MatchesState"]
