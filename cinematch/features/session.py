"""Signed-in session state: token, cached identity and the current user profile."""
from __future__ import annotations

import logging
from typing import Any, Callable

from ..events import FORCE_LOGOUT, EventEmitter
from ..schemas import AuthResponse, AuthUser, User
from ..services import AuthService
from ..storage import TokenStore
from .debounce import Debouncer

logger = logging.getLogger(__name__)

REFRESH_DEBOUNCE_SECONDS = 0.5


class SessionManager:
    """Owns the auth session and reacts to forced logouts raised by the HTTP layer."""

    def __init__(
        self,
        *,
        auth_service: AuthService,
        token_store: TokenStore,
        events: EventEmitter,
        refresh_delay: float = REFRESH_DEBOUNCE_SECONDS,
    ) -> None:
        self._auth = auth_service
        self._store = token_store
        self._events = events
        self._identity: AuthUser | None = None
        self._user: User | None = None
        self._refresh = Debouncer(refresh_delay, self._fetch_user)
        self._unsubscribe: Callable[[], None] | None = events.on(FORCE_LOGOUT, self._on_force_logout)

    @property
    def identity(self) -> AuthUser | None:
        return self._identity

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    async def _start_session(self, response: AuthResponse) -> AuthResponse:
        await self._store.save_token(response.token)
        await self._store.save_user_identity(response.user.to_payload())
        self._identity = response.user
        self._user = None
        logger.info("Signed in as %s", response.user.id)
        return response

    async def login_with_firebase_token(self, firebase_token: str) -> AuthResponse:
        return await self._start_session(await self._auth.login(firebase_token))

    async def register_with_firebase_token(self, firebase_token: str) -> AuthResponse:
        return await self._start_session(await self._auth.register(firebase_token))

    async def restore(self) -> bool:
        """Resume a session persisted by an earlier run."""

        token = await self._store.get_token()
        cached: Any = await self._store.get_user_identity()
        if not token or not cached:
            return False
        try:
            self._identity = AuthUser.model_validate(cached)
        except ValueError:
            logger.warning("Cached user identity is unusable; clearing session")
            await self._store.clear_all()
            return False
        return True

    async def logout(self) -> None:
        self._refresh.cancel()
        try:
            await self._store.clear_all()
        finally:
            self._clear()
        logger.info("Signed out")

    def refresh_user_data(self) -> None:
        """Schedule a ``/auth/me`` fetch; triggers inside the debounce window collapse into one."""

        self._refresh.trigger()

    async def flush_refresh(self) -> None:
        await self._refresh.flush()

    async def _fetch_user(self) -> None:
        if not self.is_authenticated:
            return
        user = await self._auth.get_me()
        if self.is_authenticated:
            self._user = user

    def _clear(self) -> None:
        self._identity = None
        self._user = None

    async def _on_force_logout(self) -> None:
        logger.warning("Session invalidated by the server")
        self._refresh.cancel()
        self._clear()
        await self._store.remove_user_identity()

    def close(self) -> None:
        self._refresh.cancel()
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


__all__ = ["SessionManager", "REFRESH_DEBOUNCE_SECONDS"]
