"""Schemas for one-to-one chats and their messages."""
from __future__ import annotations

from typing import Any, List, Literal, Mapping

from pydantic import Field, field_validator

from .base import ApiModel, Reactions, Timestamp, photo_url_field

MessageKind = Literal["text", "image", "video", "audio", "file"]


class Chat(ApiModel):
    id: str
    members: List[str]
    last_message: str | None = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None

    @field_validator("members")
    @classmethod
    def exactly_two_members(cls, members: List[str]) -> List[str]:
        if len(members) != 2:
            raise ValueError("A chat has exactly two members")
        return members


class ChatSummary(ApiModel):
    chat_id: str
    members: List[str] = Field(default_factory=list)
    last_message: str | None = None
    last_message_at: Timestamp = None
    unread_count: int = 0

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any], *, viewer_id: str) -> "ChatSummary":
        """Project a ``chats/{id}`` document for ``viewer_id``."""

        unread = data.get("unreadCount") or {}
        count = unread.get(viewer_id, 0) if isinstance(unread, Mapping) else 0
        return cls(
            chat_id=doc_id,
            members=list(data.get("members") or []),
            last_message=data.get("lastMessage") or None,
            last_message_at=data.get("lastMessageAt"),
            unread_count=int(count or 0),
        )


class Message(ApiModel):
    id: str
    chat_id: str | None = None
    sender_id: str
    text: str = ""
    type: MessageKind = "text"
    reactions: Reactions = Field(default_factory=dict)
    created_at: Timestamp = None
    sender_display_name: str | None = None
    sender_photo_url: str = photo_url_field("senderPhotoURL", "senderPhotoUrl")

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Message":
        return cls.model_validate({**data, "id": doc_id})


class CreateChatRequest(ApiModel):
    recipient_id: str
    initial_message: str | None = None


class SendMessageRequest(ApiModel):
    text: str = Field(..., min_length=1)
    type: MessageKind = "text"


class AddReactionRequest(ApiModel):
    emoji: str = Field(..., min_length=1)


__all__ = [
    "Chat",
    "ChatSummary",
    "Message",
    "MessageKind",
    "CreateChatRequest",
    "SendMessageRequest",
    "AddReactionRequest",
]
