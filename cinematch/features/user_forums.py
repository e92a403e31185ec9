"""The signed-in user's own forums: list, create, edit and delete."""
from __future__ import annotations

import logging

from ..schemas import ForumSummary, UpdateForumRequest
from ..services import ForumsService
from .session import SessionManager

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_ERROR = "El título y la descripción son obligatorios"


class UserForumsState:
    def __init__(self, *, forums_service: ForumsService, session: SessionManager) -> None:
        self._forums = forums_service
        self._session = session
        self.forums: list[ForumSummary] = []
        self.loading = False
        self.error: str | None = None

    def _owner_id(self) -> str | None:
        identity = self._session.identity
        return identity.id if identity else None

    async def load(self) -> None:
        owner_id = self._owner_id()
        if not owner_id:
            return
        self.loading = True
        self.error = None
        try:
            self.forums = await self._forums.get_forums_by_owner(owner_id)
        except Exception:
            logger.exception("Loading forums of %s failed", owner_id)
            self.error = "Error al cargar tus foros. Intenta de nuevo."
        finally:
            self.loading = False

    async def create_forum(self, title: str, description: str) -> bool:
        if not title.strip() or not description.strip():
            self.error = REQUIRED_FIELDS_ERROR
            return False
        try:
            await self._forums.create_forum(title.strip(), description.strip())
        except Exception:
            logger.exception("Creating forum %r failed", title)
            self.error = "Error al crear el foro. Intenta de nuevo."
            return False
        await self.load()
        return True

    async def update_forum(self, forum_id: str, title: str, description: str) -> bool:
        if not title.strip() or not description.strip():
            self.error = REQUIRED_FIELDS_ERROR
            return False
        changes = UpdateForumRequest(title=title.strip(), description=description.strip())
        try:
            await self._forums.update_forum(forum_id, changes)
        except Exception:
            logger.exception("Updating forum %s failed", forum_id)
            self.error = "Error al actualizar el foro. Intenta de nuevo."
            return False
        self.forums = [
            forum.model_copy(update={"title": changes.title, "description": changes.description})
            if forum.forum_id == forum_id
            else forum
            for forum in self.forums
        ]
        return True

    async def delete_forum(self, forum_id: str) -> bool:
        try:
            await self._forums.delete_forum(forum_id)
        except Exception:
            logger.exception("Deleting forum %s failed", forum_id)
            self.error = "Error al eliminar el foro. Intenta de nuevo."
            return False
        self.forums = [forum for forum in self.forums if forum.forum_id != forum_id]
        return True


__all__ = ["UserForumsState", "REQUIRED_FIELDS_ERROR"]
