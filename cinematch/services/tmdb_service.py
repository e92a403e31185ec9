"""TMDB catalogue proxied by the backend under ``/tmdb``."""
from __future__ import annotations

import logging
from typing import Any, Literal

from ..clients.api_client import ApiClient
from ..schemas import (
    Paginated,
    TmdbCredits,
    TmdbGenres,
    TmdbMovie,
    TmdbMovieDetails,
    TmdbTVShow,
    TmdbTVShowDetails,
    TmdbWatchProviders,
    TopRatedPoster,
)
from .base import BaseService

logger = logging.getLogger(__name__)

TimeWindow = Literal["day", "week"]

TOP_RATED_POSTERS_TIMEOUT = 8.0


class TmdbMovieService(BaseService):
    base_path = "/tmdb/movies"

    async def _page(self, *parts: Any, params: dict[str, Any] | None = None) -> Paginated[TmdbMovie]:
        return Paginated[TmdbMovie].model_validate(await self._api.get(self._path(*parts), params))

    async def get_popular(self, page: int = 1) -> Paginated[TmdbMovie]:
        return await self._page("popular", params={"page": page})

    async def search(self, query: str, page: int = 1) -> Paginated[TmdbMovie]:
        return await self._page("search", params={"query": query, "page": page})

    async def get_trending(self, time_window: TimeWindow = "week") -> Paginated[TmdbMovie]:
        return await self._page("trending", params={"timeWindow": time_window})

    async def get_upcoming(self, page: int = 1) -> Paginated[TmdbMovie]:
        return await self._page("upcoming", params={"page": page})

    async def get_top_rated(self, page: int = 1) -> Paginated[TmdbMovie]:
        return await self._page("top-rated", params={"page": page})

    async def discover(self, **filters: Any) -> Paginated[TmdbMovie]:
        """Pass TMDB discover filters through, e.g. ``with_genres="28"``."""

        return await self._page("discover", params=filters)

    async def get_details(self, movie_id: int) -> TmdbMovieDetails:
        return self._one(TmdbMovieDetails, await self._api.get(self._path(movie_id)))

    async def get_credits(self, movie_id: int) -> TmdbCredits:
        return self._one(TmdbCredits, await self._api.get(self._path(movie_id, "credits")))

    async def get_watch_providers(self, movie_id: int) -> TmdbWatchProviders:
        return self._one(TmdbWatchProviders, await self._api.get(self._path(movie_id, "watch", "providers")))


class TmdbTVService(BaseService):
    base_path = "/tmdb/tv"

    async def _page(self, *parts: Any, params: dict[str, Any] | None = None) -> Paginated[TmdbTVShow]:
        return Paginated[TmdbTVShow].model_validate(await self._api.get(self._path(*parts), params))

    async def get_popular(self, page: int = 1) -> Paginated[TmdbTVShow]:
        return await self._page("popular", params={"page": page})

    async def search(self, query: str, page: int = 1) -> Paginated[TmdbTVShow]:
        return await self._page("search", params={"query": query, "page": page})

    async def get_trending(self, time_window: TimeWindow = "week") -> Paginated[TmdbTVShow]:
        return await self._page("trending", params={"timeWindow": time_window})

    async def get_top_rated(self, page: int = 1) -> Paginated[TmdbTVShow]:
        return await self._page("top-rated", params={"page": page})

    async def get_details(self, show_id: int) -> TmdbTVShowDetails:
        return self._one(TmdbTVShowDetails, await self._api.get(self._path(show_id)))

    async def get_credits(self, show_id: int) -> TmdbCredits:
        return self._one(TmdbCredits, await self._api.get(self._path(show_id, "credits")))

    async def get_watch_providers(self, show_id: int) -> TmdbWatchProviders:
        return self._one(TmdbWatchProviders, await self._api.get(self._path(show_id, "watch", "providers")))


class TmdbConfigService(BaseService):
    base_path = "/tmdb"

    async def get_configuration(self) -> dict[str, Any]:
        return await self._api.get(self._path("configuration")) or {}

    async def get_movie_genres(self) -> TmdbGenres:
        return self._one(TmdbGenres, await self._api.get(self._path("genres", "movies")))

    async def get_tv_genres(self) -> TmdbGenres:
        return self._one(TmdbGenres, await self._api.get(self._path("genres", "tv")))


class TmdbService(BaseService):
    """Groups the movie, TV and configuration endpoints."""

    base_path = "/tmdb"

    def __init__(self, api: ApiClient) -> None:
        super().__init__(api)
        self.movies = TmdbMovieService(api)
        self.tv = TmdbTVService(api)
        self.config = TmdbConfigService(api)

    async def get_top_rated_posters(self, timeout: float = TOP_RATED_POSTERS_TIMEOUT) -> list[TopRatedPoster]:
        """Posters for the sign-in backdrop; the endpoint needs no session.

        Raises :class:`~cinematch.exceptions.RequestTimeoutError` once ``timeout`` seconds pass.
        """

        payload = await self._api.get(self._path("posters", "top-rated"), timeout=timeout, public=True)
        return self._many(TopRatedPoster, payload)


__all__ = [
    "TmdbService",
    "TmdbMovieService",
    "TmdbTVService",
    "TmdbConfigService",
    "TimeWindow",
    "TOP_RATED_POSTERS_TIMEOUT",
]
