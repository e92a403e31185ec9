"""Debounced people search."""
from __future__ import annotations

from ..schemas import User
from ..services import UsersService
from .search import MIN_QUERY_LENGTH, DebouncedSearch

SEARCH_DEBOUNCE_SECONDS = 1.5
RESULT_LIMIT = 20


class UserSearchState(DebouncedSearch[User]):
    failure_message = "No se pudieron buscar los perfiles. Intenta nuevamente."

    def __init__(self, *, users_service: UsersService, delay: float = SEARCH_DEBOUNCE_SECONDS) -> None:
        super().__init__(delay)
        self._users = users_service

    @property
    def users(self) -> list[User]:
        return self.results

    async def _fetch(self, query: str) -> list[User]:
        return await self._users.search_users(query, RESULT_LIMIT)


__all__ = ["UserSearchState", "SEARCH_DEBOUNCE_SECONDS", "MIN_QUERY_LENGTH"]
