"""Watch diary entries under ``/media-logs``."""
from __future__ import annotations

from typing import Any, Iterable

from ..schemas import LogMediaViewRequest, MediaLog, MediaType, MessageResponse, UpdateMediaLogRequest, UserMediaStats
from ..utils.dates import coerce_timestamp, format_long_date
from ..utils.ratings import render_stars, validate_rating
from .base import BaseService

AVERAGE_MOVIE_MINUTES = 120
AVERAGE_SHOW_MINUTES = 600


class MediaLogsService(BaseService):
    base_path = "/media-logs"

    async def log_view(self, data: LogMediaViewRequest) -> MediaLog:
        return self._one(MediaLog, await self._api.post(self._path(), data.to_payload()))

    async def get_my_logs(self, limit: int = 50) -> list[MediaLog]:
        return self._many(MediaLog, await self._api.get(self._path("my-logs"), {"limit": limit}))

    async def get_media_logs(self, tmdb_id: int, media_type: MediaType) -> list[MediaLog]:
        return self._many(MediaLog, await self._api.get(self._path("my-logs", tmdb_id, media_type)))

    async def get_my_stats(self) -> UserMediaStats:
        return self._one(UserMediaStats, await self._api.get(self._path("stats", "me")))

    async def get_log_by_id(self, log_id: str) -> MediaLog:
        return self._one(MediaLog, await self._api.get(self._path(log_id)))

    async def update_log(self, log_id: str, data: UpdateMediaLogRequest) -> MediaLog:
        return self._one(MediaLog, await self._api.put(self._path(log_id), data.to_payload()))

    async def delete_log(self, log_id: str) -> MessageResponse:
        payload = await self._api.delete(self._path(log_id))
        return self._one(MessageResponse, payload or {"message": ""})

    async def has_watched(self, tmdb_id: int, media_type: MediaType) -> bool:
        return bool(await self.get_media_logs(tmdb_id, media_type))

    async def get_last_rating(self, tmdb_id: int, media_type: MediaType) -> float | None:
        """Rating of the most recent log, or ``None`` when unrated or never logged."""

        logs = await self.get_media_logs(tmdb_id, media_type)
        if not logs:
            return None
        return logs[0].rating or None

    @staticmethod
    def render_stars(rating: float) -> str:
        return render_stars(rating)

    @staticmethod
    def validate_rating(rating: float) -> float:
        return validate_rating(rating)

    @staticmethod
    def calculate_total_watch_time(logs: Iterable[MediaLog], avg_movie_minutes: int = AVERAGE_MOVIE_MINUTES) -> int:
        """Approximate minutes watched: fixed averages per movie and per show."""

        movies = shows = 0
        for log in logs:
            if log.media_type == "movie":
                movies += 1
            else:
                shows += 1
        return movies * avg_movie_minutes + shows * AVERAGE_SHOW_MINUTES

    @staticmethod
    def format_watch_date(value: Any) -> str:
        moment = coerce_timestamp(value)
        return format_long_date(moment) if moment else ""


__all__ = ["MediaLogsService", "AVERAGE_MOVIE_MINUTES", "AVERAGE_SHOW_MINUTES"]
