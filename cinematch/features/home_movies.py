"""Home screen carousels: popular, trending, upcoming and top-rated movies."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..schemas import Paginated, TmdbMovie
from ..services import TmdbService

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MovieSection:
    movies: list[TmdbMovie] = field(default_factory=list)
    loading: bool = False
    error: str | None = None


SECTION_ERRORS = {
    "popular": "Error al cargar películas populares",
    "trending": "Error al cargar películas en tendencia",
    "upcoming": "Error al cargar próximos estrenos",
    "top_rated": "Error al cargar películas mejor valoradas",
}


class HomeMoviesState:
    """Each section loads in parallel and fails on its own."""

    def __init__(self, *, tmdb_service: TmdbService) -> None:
        self._tmdb = tmdb_service
        self.popular = MovieSection()
        self.trending = MovieSection()
        self.upcoming = MovieSection()
        self.top_rated = MovieSection()
        self.refreshing = False

    @property
    def loading(self) -> bool:
        return any(section.loading for section in self._sections().values())

    def _sections(self) -> dict[str, MovieSection]:
        return {
            "popular": self.popular,
            "trending": self.trending,
            "upcoming": self.upcoming,
            "top_rated": self.top_rated,
        }

    async def _load_section(self, name: str, fetch: Callable[[], Awaitable[Paginated[TmdbMovie]]]) -> None:
        section = self._sections()[name]
        section.loading = True
        section.error = None
        try:
            page = await fetch()
        except Exception:
            logger.exception("Loading %s movies failed", name)
            section.error = SECTION_ERRORS[name]
            return
        finally:
            section.loading = False
        section.movies = page.results

    async def load(self) -> None:
        movies = self._tmdb.movies
        await asyncio.gather(
            self._load_section("popular", lambda: movies.get_popular(1)),
            self._load_section("trending", lambda: movies.get_trending("week")),
            self._load_section("upcoming", lambda: movies.get_upcoming(1)),
            self._load_section("top_rated", lambda: movies.get_top_rated(1)),
        )

    async def refresh(self) -> None:
        self.refreshing = True
        try:
            await self.load()
        finally:
            self.refreshing = False


__all__ = ["HomeMoviesState", "MovieSection", "SECTION_ERRORS"]
