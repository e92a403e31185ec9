"""Users who recently watched the same titles, under ``/matches``."""
from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from ..schemas import MatchesResponse, PotentialMatch
from ..utils.dates import format_days_ago
from ..utils.images import build_poster_url
from .base import BaseService


class MatchesService(BaseService):
    base_path = "/matches"

    async def get_potential_matches(
        self,
        max_days_ago: int = 30,
        min_rating: float | None = None,
        limit: int = 50,
    ) -> MatchesResponse:
        params = {"maxDaysAgo": max_days_ago, "minRating": min_rating or None, "limit": limit}
        return self._one(MatchesResponse, await self._api.get(self._path(), params))

    async def get_matches_for_movie(self, movie_id: int, max_days_ago: int = 30) -> list[PotentialMatch]:
        payload = await self._api.get(self._path("movie", movie_id), {"maxDaysAgo": max_days_ago})
        return self._many(PotentialMatch, payload)

    @staticmethod
    def build_poster_url(poster_path: str | None, size: str = "w500") -> str | None:
        return build_poster_url(poster_path, size)

    @staticmethod
    def format_days_ago(days_ago: int) -> str:
        return format_days_ago(days_ago)

    @staticmethod
    def group_matches_by_movie(matches: Iterable[PotentialMatch]) -> dict[int, list[PotentialMatch]]:
        groups: dict[int, list[PotentialMatch]] = defaultdict(list)
        for match in matches:
            groups[match.movie_id].append(match)
        return dict(groups)

    @staticmethod
    def get_unique_users(matches: Iterable[PotentialMatch]) -> list[PotentialMatch]:
        """Keep the first match per user."""

        seen: set[str] = set()
        unique: list[PotentialMatch] = []
        for match in matches:
            if match.user_id in seen:
                continue
            seen.add(match.user_id)
            unique.append(match)
        return unique

    @staticmethod
    def sort_by_recent(matches: Iterable[PotentialMatch]) -> list[PotentialMatch]:
        return sorted(matches, key=lambda match: match.days_ago)


__all__ = ["MatchesService"]
