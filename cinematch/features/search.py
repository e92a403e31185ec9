"""Debounced search screens for movies, forums and public lists."""
from __future__ import annotations

import logging
from typing import Generic, TypeVar

from ..schemas import ForumSummary, MediaListWithOwner, TmdbMovie
from ..services import ForumsService, ListsService, TmdbService
from .debounce import Debouncer

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_QUERY_LENGTH = 2
MOVIE_SEARCH_DEBOUNCE_SECONDS = 0.5
FORUM_SEARCH_DEBOUNCE_SECONDS = 1.5
LIST_SEARCH_DEBOUNCE_SECONDS = 1.5


class DebouncedSearch(Generic[T]):
    """Query box whose search runs once typing pauses for ``delay`` seconds.

    Queries shorter than ``MIN_QUERY_LENGTH`` are ignored and an empty query
    clears the results. Subclasses implement :meth:`_fetch`.
    """

    failure_message = "No se pudo completar la búsqueda. Intenta nuevamente."

    def __init__(self, delay: float) -> None:
        self._debouncer = Debouncer(delay, self._apply_query)
        self.query = ""
        self.results: list[T] = []
        self.loading = False
        self.error: str | None = None
        self.has_searched = False

    def set_query(self, query: str) -> None:
        self.query = query
        self._debouncer.trigger()

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def _apply_query(self) -> None:
        text = self.query.strip()
        if len(text) >= MIN_QUERY_LENGTH:
            await self.search(text)
        elif not text:
            self.clear()

    async def _fetch(self, query: str) -> list[T]:
        raise NotImplementedError

    async def search(self, query: str) -> None:
        text = query.strip()
        if not text:
            self.results = []
            self.has_searched = False
            self.error = None
            return
        self.loading = True
        self.error = None
        try:
            self.results = await self._fetch(text)
            self.has_searched = True
        except Exception:
            logger.exception("%s for %r failed", type(self).__name__, text)
            self.error = self.failure_message
            self.results = []
        finally:
            self.loading = False

    def clear(self) -> None:
        self._debouncer.cancel()
        self.query = ""
        self.results = []
        self.error = None
        self.has_searched = False

    def close(self) -> None:
        self._debouncer.cancel()


class MovieSearchState(DebouncedSearch[TmdbMovie]):
    """TMDB title search with page-by-page loading."""

    failure_message = "No se pudieron buscar las películas. Intenta nuevamente."

    def __init__(self, *, tmdb_service: TmdbService, delay: float = MOVIE_SEARCH_DEBOUNCE_SECONDS) -> None:
        super().__init__(delay)
        self._tmdb = tmdb_service
        self.current_page = 1
        self.total_pages = 0

    @property
    def movies(self) -> list[TmdbMovie]:
        return self.results

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.total_pages

    async def _fetch(self, query: str) -> list[TmdbMovie]:
        self.current_page = 1
        page = await self._tmdb.movies.search(query, 1)
        self.current_page = page.page
        self.total_pages = page.total_pages
        return page.results

    async def load_more(self) -> None:
        text = self.query.strip()
        if not text or self.loading or not self.has_more_pages:
            return
        self.loading = True
        self.error = None
        try:
            page = await self._tmdb.movies.search(text, self.current_page + 1)
        except Exception:
            logger.exception("Loading page %s of %r failed", self.current_page + 1, text)
            self.error = "No se pudieron cargar más películas."
            return
        finally:
            self.loading = False
        self.results = [*self.results, *page.results]
        self.current_page = page.page
        self.total_pages = page.total_pages

    def clear(self) -> None:
        super().clear()
        self.current_page = 1
        self.total_pages = 0


class ForumSearchState(DebouncedSearch[ForumSummary]):
    failure_message = "No se pudieron buscar los foros. Intenta nuevamente."

    def __init__(self, *, forums_service: ForumsService, delay: float = FORUM_SEARCH_DEBOUNCE_SECONDS) -> None:
        super().__init__(delay)
        self._forums = forums_service

    @property
    def forums(self) -> list[ForumSummary]:
        return self.results

    async def _fetch(self, query: str) -> list[ForumSummary]:
        return await self._forums.search_forums(query)


class ListSearchState(DebouncedSearch[MediaListWithOwner]):
    """Server-side search over public lists; clearing the box clears results at once."""

    failure_message = "No se pudieron buscar las listas. Intenta nuevamente."

    def __init__(self, *, lists_service: ListsService, delay: float = LIST_SEARCH_DEBOUNCE_SECONDS) -> None:
        super().__init__(delay)
        self._lists = lists_service

    @property
    def lists(self) -> list[MediaListWithOwner]:
        return self.results

    def set_query(self, query: str) -> None:
        if not query:
            self.clear()
            return
        super().set_query(query)

    async def _fetch(self, query: str) -> list[MediaListWithOwner]:
        return await self._lists.search_public_lists(query)


__all__ = [
    "DebouncedSearch",
    "MovieSearchState",
    "ForumSearchState",
    "ListSearchState",
    "MIN_QUERY_LENGTH",
]
