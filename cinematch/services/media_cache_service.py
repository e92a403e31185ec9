"""Backend cache of TMDB titles under ``/media-cache`` (cache-first reads)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from ..exceptions import HttpError
from ..schemas import CacheStats, HybridResponse, MediaCache, MediaDetailsWithReviews, MediaType, MessageResponse
from ..utils.dates import coerce_timestamp
from .base import BaseService

MOVIE_GENRES: dict[int, str] = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}

TV_GENRES: dict[int, str] = {
    10759: "Action & Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    10762: "Kids",
    9648: "Mystery",
    10763: "News",
    10764: "Reality",
    10765: "Sci-Fi & Fantasy",
    10766: "Soap",
    10767: "Talk",
    10768: "War & Politics",
    37: "Western",
}


class MediaCacheService(BaseService):
    base_path = "/media-cache"

    async def search_cache(self, query: str, media_type: MediaType | None = None) -> list[MediaCache]:
        payload = await self._api.get(self._path("cache", "search"), {"query": query, "type": media_type})
        return self._many(MediaCache, payload)

    async def get_popular_cached(self, media_type: MediaType, limit: int = 20) -> list[MediaCache]:
        payload = await self._api.get(self._path("cache", "popular", media_type), {"limit": limit})
        return self._many(MediaCache, payload)

    async def get_recent_cached(self, limit: int = 20) -> list[MediaCache]:
        return self._many(MediaCache, await self._api.get(self._path("cache", "recent"), {"limit": limit}))

    async def get_cached_media(self, tmdb_id: int, media_type: MediaType) -> MediaCache | None:
        """Return the cached entry, or ``None`` when the cache has no such title."""

        try:
            payload = await self._api.get(self._path("cache", tmdb_id, media_type))
        except HttpError as exc:
            if exc.status_code == 404:
                return None
            raise
        return self._one(MediaCache, payload)

    async def get_cache_stats(self) -> CacheStats:
        return self._one(CacheStats, await self._api.get(self._path("cache", "stats")))

    async def get_movie(self, tmdb_id: int) -> HybridResponse:
        return self._one(HybridResponse, await self._api.get(self._path("hybrid", "movie", tmdb_id)))

    async def get_tv_show(self, tmdb_id: int) -> HybridResponse:
        return self._one(HybridResponse, await self._api.get(self._path("hybrid", "tv", tmdb_id)))

    async def save_movie_to_cache(self, tmdb_id: int) -> MessageResponse:
        return self._one(MessageResponse, await self._api.post(self._path("cache", "save-movie", tmdb_id)))

    async def save_tv_show_to_cache(self, tmdb_id: int) -> MessageResponse:
        return self._one(MessageResponse, await self._api.post(self._path("cache", "save-tv", tmdb_id)))

    async def delete_from_cache(self, tmdb_id: int, media_type: MediaType) -> MessageResponse:
        return self._one(MessageResponse, await self._api.delete(self._path("cache", tmdb_id, media_type)))

    async def get_media_details_with_reviews(
        self, tmdb_id: int, media_type: MediaType = "movie"
    ) -> MediaDetailsWithReviews:
        payload = await self._api.get(self._path(media_type, tmdb_id, "details-with-reviews"))
        return self._one(MediaDetailsWithReviews, payload)

    @staticmethod
    def is_cache_recent(updated_at: Any, *, now: datetime | None = None) -> bool:
        moment = coerce_timestamp(updated_at)
        if moment is None:
            return False
        return (now or datetime.now(timezone.utc)) - moment < timedelta(days=1)

    @staticmethod
    def get_genre_names(genre_ids: Iterable[int], media_type: MediaType) -> list[str]:
        table = MOVIE_GENRES if media_type == "movie" else TV_GENRES
        return [table.get(genre_id, "Unknown") for genre_id in genre_ids]


__all__ = ["MediaCacheService", "MOVIE_GENRES", "TV_GENRES"]
