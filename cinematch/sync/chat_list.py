"""Live list of the signed-in user's chats."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Sequence

from ..clients.firestore_listener import ChangeEvent, ListenerFactory, Unsubscribe
from ..exceptions import error_message
from ..schemas import ChatSummary
from ..services import ChatsService
from .reconcile import apply_changes

logger = logging.getLogger(__name__)

DEFAULT_CHAT_LIMIT = 50

LOAD_ERROR = "Error al cargar los chats"
LISTENER_ERROR = "Error al escuchar cambios en los chats"


def _chat_key(chat: ChatSummary) -> str:
    return chat.chat_id


class ChatListSync:
    """Chat summaries fetched over REST and kept current by a ``members`` listener."""

    def __init__(
        self,
        user_id: str,
        *,
        chats_service: ChatsService,
        source_factory: ListenerFactory,
        limit: int = DEFAULT_CHAT_LIMIT,
    ) -> None:
        self.user_id = user_id
        self._chats_service = chats_service
        self._sources = source_factory
        self._limit = limit
        self._chats: list[ChatSummary] = []
        self._is_loading = False
        self._error: str | None = None
        self._listener_failed = False
        self._unsubscribe: Unsubscribe | None = None
        self._started = False
        self._closed = False

    @property
    def chats(self) -> list[ChatSummary]:
        return list(self._chats)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def is_listening(self) -> bool:
        return self._unsubscribe is not None

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        await self.refresh()
        if self._closed:
            return
        self._unsubscribe = self._sources.user_chats(self.user_id, limit=self._limit).listen(
            self._on_changes, self._on_error
        )

    def close(self) -> None:
        self._closed = True
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    async def __aenter__(self) -> "ChatListSync":
        await self.start()
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.close()

    async def refresh(self) -> None:
        if self._closed:
            return
        self._is_loading = True
        try:
            chats = await self._chats_service.get_my_chats(self._limit)
        except Exception as exc:
            logger.warning("Loading chats for %s failed: %s", self.user_id, exc)
            if not self._closed:
                self._error = error_message(exc, LOAD_ERROR)
            return
        finally:
            self._is_loading = False
        if self._closed:
            return
        self._chats = chats
        self._error = None
        self._listener_failed = False

    async def delete_chats(self, chat_ids: Iterable[str]) -> None:
        """Delete chats concurrently; local entries go only after every delete succeeds."""

        targets = list(chat_ids)
        try:
            await asyncio.gather(*(self._chats_service.delete_chat(chat_id) for chat_id in targets))
        except Exception:
            logger.exception("Deleting chats %s failed", targets)
            raise
        if self._closed:
            return
        removed = set(targets)
        self._chats = [chat for chat in self._chats if chat.chat_id not in removed]

    def _build(self, doc_id: str, data: Mapping[str, Any]) -> ChatSummary:
        return ChatSummary.from_document(doc_id, data, viewer_id=self.user_id)

    def _on_changes(self, changes: Sequence[ChangeEvent]) -> None:
        if self._closed or self._listener_failed:
            return
        try:
            self._chats = apply_changes(self._chats, changes, key=_chat_key, build=self._build)
        except Exception as exc:
            self._on_error(exc)

    def _on_error(self, exc: BaseException) -> None:
        if self._closed:
            return
        logger.error("Chat list listener for %s failed: %s", self.user_id, exc)
        self._listener_failed = True
        self._error = LISTENER_ERROR


__all__ = ["ChatListSync", "DEFAULT_CHAT_LIMIT"]
