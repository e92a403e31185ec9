"""Shared configuration for backend payload models."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, Literal

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..utils.dates import coerce_timestamp

MediaType = Literal["movie", "tv"]

# Accepts ISO strings, Firestore {_seconds, _nanoseconds} maps and datetimes
Timestamp = Annotated[datetime | None, BeforeValidator(coerce_timestamp)]


def _clean_reactions(value: Any) -> Any:
    if not value:
        return {}
    if isinstance(value, dict):
        return {user_id: emoji for user_id, emoji in value.items() if emoji}
    return value


# user id -> emoji; null maps and empty emoji are dropped
Reactions = Annotated[Dict[str, str], BeforeValidator(_clean_reactions)]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown fields are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def photo_url_field(*aliases: str) -> Any:
    """The backend spells photo URLs both ``photoURL`` and ``photoUrl``; the first alias is written back."""

    names = aliases or ("photoURL", "photoUrl")
    return Field(
        default="",
        validation_alias=AliasChoices(*names),
        serialization_alias=names[0],
    )


class MessageResponse(ApiModel):
    message: str


__all__ = ["ApiModel", "MediaType", "Timestamp", "Reactions", "MessageResponse", "photo_url_field"]
