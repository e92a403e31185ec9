"""Live message list for one open chat: a REST page kept current by a listener."""
from __future__ import annotations

import enum
import logging
from typing import Any, Mapping, Sequence

from ..clients.firestore_listener import ChangeEvent, ListenerFactory, Unsubscribe
from ..exceptions import CineMatchError, error_message
from ..schemas import Message, MessageKind
from ..services import ChatsService
from ..utils.reactions import group_reactions
from .reconcile import apply_changes

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 30

LOAD_ERROR = "Error al cargar mensajes"
LISTENER_ERROR = "Error al escuchar mensajes en tiempo real"


class SyncState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIAL_LOAD = "initial_load"
    LISTENING = "listening"
    TORN_DOWN = "torn_down"


def _message_key(message: Message) -> str:
    return message.id


class ChatMessagesSync:
    """Holds the newest ``page_size`` messages of a chat.

    ``start()`` fetches the page over REST and only then attaches the realtime
    listener, so listener ``added`` events never race the base page. Sending,
    deleting and reacting go through REST only; the resulting change shows up
    once the listener echoes it.
    """

    def __init__(
        self,
        chat_id: str,
        *,
        chats_service: ChatsService,
        source_factory: ListenerFactory,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.chat_id = chat_id
        self._chats = chats_service
        self._sources = source_factory
        self._page_size = page_size
        self._state = SyncState.UNINITIALIZED
        self._messages: list[Message] = []
        self._is_loading = False
        self._error: str | None = None
        self._listener_failed = False
        self._unsubscribe: Unsubscribe | None = None

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def error(self) -> str | None:
        return self._error

    async def start(self) -> None:
        if self._state is not SyncState.UNINITIALIZED:
            raise CineMatchError(f"Chat sync for {self.chat_id} already started")
        self._state = SyncState.INITIAL_LOAD
        self._is_loading = True
        try:
            await self._load_messages()
        finally:
            self._is_loading = False
        if self._state is SyncState.TORN_DOWN:
            return
        self._unsubscribe = self._sources.chat_messages(self.chat_id, limit=self._page_size).listen(
            self._on_changes, self._on_error
        )
        self._state = SyncState.LISTENING
        logger.debug("Listening to chat %s", self.chat_id)

    def close(self) -> None:
        if self._state is SyncState.TORN_DOWN:
            return
        self._state = SyncState.TORN_DOWN
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.debug("Stopped listening to chat %s", self.chat_id)

    async def __aenter__(self) -> "ChatMessagesSync":
        await self.start()
        return self

    async def __aexit__(self, *_exc: object) -> None:
        self.close()

    async def _load_messages(self) -> bool:
        try:
            page = await self._chats.get_chat_messages(self.chat_id, limit=self._page_size)
        except Exception as exc:
            logger.warning("Loading messages for chat %s failed: %s", self.chat_id, exc)
            if self._state is not SyncState.TORN_DOWN:
                self._error = error_message(exc, LOAD_ERROR)
            return False
        if self._state is SyncState.TORN_DOWN:
            return False
        self._messages = page
        self._error = None
        return True

    async def refresh_messages(self) -> None:
        """Re-fetch the REST page; clears ``error`` and resumes live updates on success."""

        if self._state is SyncState.TORN_DOWN:
            return
        if await self._load_messages():
            self._listener_failed = False

    def _build(self, doc_id: str, data: Mapping[str, Any]) -> Message:
        return Message.from_document(doc_id, {"chatId": self.chat_id, **data})

    def _on_changes(self, changes: Sequence[ChangeEvent]) -> None:
        if self._state is not SyncState.LISTENING or self._listener_failed:
            return
        try:
            self._messages = apply_changes(self._messages, changes, key=_message_key, build=self._build)
        except Exception as exc:
            self._on_error(exc)

    def _on_error(self, exc: BaseException) -> None:
        if self._state is not SyncState.LISTENING:
            return
        logger.error("Realtime listener for chat %s failed: %s", self.chat_id, exc)
        self._listener_failed = True
        self._error = LISTENER_ERROR

    async def send_message(self, text: str, type: MessageKind = "text") -> None:
        try:
            await self._chats.send_message(self.chat_id, text, type)
        except Exception:
            logger.exception("Sending message to chat %s failed", self.chat_id)
            raise

    async def delete_message(self, message_id: str) -> None:
        try:
            await self._chats.delete_message(self.chat_id, message_id)
        except Exception:
            logger.exception("Deleting message %s failed", message_id)
            raise

    async def add_reaction(self, message_id: str, emoji: str) -> None:
        try:
            await self._chats.add_reaction(self.chat_id, message_id, emoji)
        except Exception:
            logger.exception("Adding reaction to message %s failed", message_id)
            raise

    async def remove_reaction(self, message_id: str) -> None:
        try:
            await self._chats.remove_reaction(self.chat_id, message_id)
        except Exception:
            logger.exception("Removing reaction from message %s failed", message_id)
            raise

    def grouped_reactions(self, message_id: str) -> dict[str, int]:
        for message in self._messages:
            if message.id == message_id:
                return group_reactions(message.reactions)
        return {}


__all__ = ["ChatMessagesSync", "SyncState", "DEFAULT_PAGE_SIZE"]
