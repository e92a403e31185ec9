"""State for another user's profile page and the follow toggle."""
from __future__ import annotations

import asyncio
import logging

from ..exceptions import error_message
from ..schemas import FavoriteItem, ProfileStats, User
from ..services import UsersService
from .session import SessionManager

logger = logging.getLogger(__name__)


class UserProfileState:
    def __init__(self, user_id: str, *, users_service: UsersService, session: SessionManager) -> None:
        self.user_id = user_id
        self._users = users_service
        self._session = session
        self.user: User | None = None
        self.favorites: list[FavoriteItem] = []
        self.recent_logs: list[dict] = []
        self.recent_reviews: list[dict] = []
        self.stats = ProfileStats()
        self.is_following = False
        self.is_loading = False
        self.is_toggling_follow = False
        self.error: str | None = None

    async def _following_status(self) -> bool:
        if not self._session.is_authenticated:
            return False
        return await self._users.is_following(self.user_id)

    async def load(self) -> None:
        self.is_loading = True
        self.error = None
        try:
            profile, following = await asyncio.gather(
                self._users.get_user_profile(self.user_id),
                self._following_status(),
            )
        except Exception as exc:
            logger.exception("Loading profile %s failed", self.user_id)
            self.error = error_message(exc, "Error al cargar perfil")
            return
        finally:
            self.is_loading = False
        self.user = User.model_validate({**profile.user, "id": self.user_id})
        self.favorites = profile.recent_favorites
        self.recent_logs = profile.recent_logs
        self.recent_reviews = profile.recent_reviews
        self.stats = profile.stats
        self.is_following = following

    async def toggle_follow(self) -> None:
        """Follow or unfollow, then adjust the follower count and refresh the viewer."""

        if not self._session.is_authenticated or self.is_toggling_follow:
            return
        self.is_toggling_follow = True
        try:
            if self.is_following:
                await self._users.unfollow_user(self.user_id)
                delta = -1
            else:
                await self._users.follow_user(self.user_id)
                delta = 1
            self.is_following = not self.is_following
            if self.user is not None:
                self.user = self.user.model_copy(update={"followers_count": self.user.followers_count + delta})
            self._session.refresh_user_data()
        except Exception as exc:
            logger.exception("Toggling follow for %s failed", self.user_id)
            self.error = error_message(exc, "Error al actualizar seguimiento")
        finally:
            self.is_toggling_follow = False


__all__ = ["UserProfileState"]
