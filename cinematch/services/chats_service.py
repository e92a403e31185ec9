"""One-to-one chats and messages under ``/chats``."""
from __future__ import annotations

from typing import Any, Iterable

from ..schemas import (
    AddReactionRequest,
    Chat,
    ChatSummary,
    CreateChatRequest,
    Message,
    MessageKind,
    SendMessageRequest,
)
from ..utils.dates import coerce_timestamp, format_elapsed_short, format_long_date
from .base import BaseService


class ChatsService(BaseService):
    base_path = "/chats"

    async def create_or_get_chat(self, recipient_id: str, initial_message: str | None = None) -> Chat:
        body = CreateChatRequest(recipient_id=recipient_id, initial_message=initial_message)
        return self._one(Chat, await self._api.post(self._path(), body.to_payload()))

    async def get_my_chats(self, limit: int = 50) -> list[ChatSummary]:
        return self._many(ChatSummary, await self._api.get(self._path(), {"limit": limit}))

    async def get_chat_by_id(self, chat_id: str) -> Chat:
        return self._one(Chat, await self._api.get(self._path(chat_id)))

    async def delete_chat(self, chat_id: str) -> None:
        await self._api.delete(self._path(chat_id))

    async def send_message(self, chat_id: str, text: str, type: MessageKind = "text") -> Message:
        body = SendMessageRequest(text=text, type=type)
        payload = await self._api.post(self._path(chat_id, "messages"), body.to_payload())
        return self._one(Message, payload)

    async def get_chat_messages(self, chat_id: str, limit: int = 100) -> list[Message]:
        """Newest-first page of messages with sender display data attached."""

        payload = await self._api.get(self._path(chat_id, "messages"), {"limit": limit})
        return self._many(Message, payload)

    async def delete_message(self, chat_id: str, message_id: str) -> None:
        await self._api.delete(self._path(chat_id, "messages", message_id))

    async def add_reaction(self, chat_id: str, message_id: str, emoji: str) -> None:
        body = AddReactionRequest(emoji=emoji)
        await self._api.post(self._path(chat_id, "messages", message_id, "reactions"), body.to_payload())

    async def remove_reaction(self, chat_id: str, message_id: str) -> None:
        await self._api.delete(self._path(chat_id, "messages", message_id, "reactions"))

    @staticmethod
    def get_other_user(chat: Chat | ChatSummary, my_user_id: str) -> str:
        return next((uid for uid in chat.members if uid != my_user_id), "")

    @staticmethod
    def format_message_time(value: Any) -> str:
        moment = coerce_timestamp(value)
        return format_elapsed_short(moment) if moment else ""

    @staticmethod
    def group_messages_by_date(messages: Iterable[Message]) -> dict[str, list[Message]]:
        """Bucket messages under their long-form day label, keeping input order."""

        groups: dict[str, list[Message]] = {}
        for message in messages:
            key = format_long_date(message.created_at) if message.created_at else ""
            groups.setdefault(key, []).append(message)
        return groups


__all__ = ["ChatsService"]
