"""State for a movie page: TMDB details plus the viewer's own favourite and rating."""
from __future__ import annotations

import asyncio
import logging

from ..schemas import AddFavoriteRequest, TmdbCredits, TmdbMovieDetails, TmdbWatchProviders
from ..services import MediaLogsService, TmdbService, UsersService

logger = logging.getLogger(__name__)


class MovieDetailsState:
    def __init__(
        self,
        movie_id: int,
        *,
        tmdb_service: TmdbService,
        users_service: UsersService,
        media_logs_service: MediaLogsService,
    ) -> None:
        self.movie_id = movie_id
        self._tmdb = tmdb_service
        self._users = users_service
        self._logs = media_logs_service
        self.details: TmdbMovieDetails | None = None
        self.credits: TmdbCredits | None = None
        self.watch_providers: TmdbWatchProviders | None = None
        self.is_favorite = False
        self.user_rating: float | None = None
        self.error: str | None = None
        self.refreshing = False

    async def _load_details(self) -> None:
        try:
            self.details = await self._tmdb.movies.get_details(self.movie_id)
        except Exception:
            logger.exception("Loading details for movie %s failed", self.movie_id)
            self.error = "Error al cargar detalles de la película"

    # Credits, providers, favourite and rating are secondary: failures are logged only.

    async def _load_credits(self) -> None:
        try:
            self.credits = await self._tmdb.movies.get_credits(self.movie_id)
        except Exception as exc:
            logger.warning("Loading credits for movie %s failed: %s", self.movie_id, exc)

    async def _load_watch_providers(self) -> None:
        try:
            self.watch_providers = await self._tmdb.movies.get_watch_providers(self.movie_id)
        except Exception as exc:
            logger.warning("Loading watch providers for movie %s failed: %s", self.movie_id, exc)

    async def _check_favorite(self) -> None:
        try:
            self.is_favorite = await self._users.is_favorite(self.movie_id, "movie")
        except Exception as exc:
            logger.info("Favourite check for movie %s skipped: %s", self.movie_id, exc)

    async def _load_user_rating(self) -> None:
        try:
            self.user_rating = await self._logs.get_last_rating(self.movie_id, "movie")
        except Exception as exc:
            logger.info("User rating for movie %s skipped: %s", self.movie_id, exc)

    async def load(self) -> None:
        self.error = None
        await asyncio.gather(self._load_details(), self._load_credits(), self._load_watch_providers())
        await asyncio.gather(self._check_favorite(), self._load_user_rating())

    async def refresh(self) -> None:
        self.refreshing = True
        try:
            await self.load()
        finally:
            self.refreshing = False

    async def toggle_favorite(self) -> None:
        self.error = None
        try:
            if self.is_favorite:
                await self._users.remove_from_favorites(self.movie_id, "movie")
                self.is_favorite = False
            else:
                await self._users.add_to_favorites(
                    AddFavoriteRequest(
                        tmdb_id=self.movie_id,
                        media_type="movie",
                        title=self.details.title if self.details else "",
                        poster_path=(self.details.poster_path if self.details else None) or "",
                    )
                )
                self.is_favorite = True
        except Exception:
            logger.exception("Toggling favourite for movie %s failed", self.movie_id)
            self.error = "Error al actualizar favoritos"


__all__ = ["MovieDetailsState"]
