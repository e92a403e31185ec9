"""Account settings screen: the viewer's profile, language, region and privacy toggles.

The backend replaces the whole ``settings`` object on update, so every action
sends the current settings merged with the one field being changed and then
re-reads the user.
"""
from __future__ import annotations

import logging
from typing import Any, Literal

from ..schemas import UpdateUserRequest, User, UserSettings
from ..services import UsersService
from .session import SessionManager

logger = logging.getLogger(__name__)

PrivacyField = Literal["show_email", "show_birthdate"]


class UserSettingsState:
    def __init__(self, *, users_service: UsersService, session: SessionManager) -> None:
        self._users = users_service
        self._session = session
        self.user: User | None = None
        self.loading = False
        self.saving = False
        self.error: str | None = None

    @property
    def settings(self) -> UserSettings:
        if self.user is not None and self.user.settings is not None:
            return self.user.settings
        return UserSettings()

    async def load(self) -> None:
        identity = self._session.identity
        if identity is None:
            return
        self.loading = True
        self.error = None
        try:
            self.user = await self._users.get_user_by_id(identity.id)
        except Exception:
            logger.exception("Loading settings for %s failed", identity.id)
            self.error = "Failed to load user data"
        finally:
            self.loading = False

    async def _update(self, changes: UpdateUserRequest, failure: str) -> bool:
        self.saving = True
        self.error = None
        try:
            await self._users.update_my_profile(changes)
        except Exception:
            logger.exception("Updating profile failed")
            self.error = failure
            return False
        finally:
            self.saving = False
        await self.load()
        return True

    def _merged_settings(self, **changes: Any) -> dict[str, Any]:
        return self.settings.model_copy(update=changes).model_dump(mode="json", by_alias=True)

    async def change_language(self, language: str) -> bool:
        body = UpdateUserRequest(settings=self._merged_settings(language=language))
        return await self._update(body, "Failed to update language")

    async def change_region(self, region: str) -> bool:
        body = UpdateUserRequest(settings=self._merged_settings(region=region))
        return await self._update(body, "Failed to update region")

    async def toggle_privacy(self, field_name: PrivacyField) -> bool:
        current = self.settings.privacy
        privacy = current.model_copy(update={field_name: not getattr(current, field_name)})
        body = UpdateUserRequest(settings=self._merged_settings(privacy=privacy))
        return await self._update(body, "Failed to update privacy settings")

    async def save_profile(self, changes: UpdateUserRequest) -> bool:
        return await self._update(changes, "Failed to update profile. Please try again.")


__all__ = ["UserSettingsState", "PrivacyField"]
