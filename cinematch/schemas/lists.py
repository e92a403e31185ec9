"""Schemas for user-curated movie and TV lists."""
from __future__ import annotations

from typing import List

from pydantic import Field

from .base import ApiModel, MediaType, Timestamp


class ListCover(ApiModel):
    tmdb_id: int
    media_type: MediaType
    title: str = ""
    poster_path: str | None = ""
    custom_title: str | None = None


class MediaList(ApiModel):
    id: str
    owner_id: str
    title: str
    description: str = ""
    is_public: bool = True
    cover: ListCover | None = None
    items_count: int = 0
    created_at: Timestamp = None
    updated_at: Timestamp = None


class MediaListWithOwner(MediaList):
    owner_display_name: str = ""


class ListItem(ApiModel):
    id: str
    tmdb_id: int
    media_type: MediaType
    title: str = ""
    poster_path: str | None = ""
    notes: str | None = ""
    added_at: Timestamp = None


class CreateListRequest(ApiModel):
    title: str = Field(..., min_length=1)
    description: str | None = None
    is_public: bool | None = None
    cover: ListCover | None = None


class UpdateListRequest(ApiModel):
    title: str | None = None
    description: str | None = None
    is_public: bool | None = None
    cover: ListCover | None = None


class AddListItemRequest(ApiModel):
    tmdb_id: int
    media_type: MediaType
    title: str
    poster_path: str = ""
    notes: str | None = None


class UpdateListItemRequest(ApiModel):
    notes: str | None = None


class ListSearchPage(ApiModel):
    items: List[MediaListWithOwner] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20


__all__ = [
    "ListCover",
    "MediaList",
    "MediaListWithOwner",
    "ListItem",
    "CreateListRequest",
    "UpdateListRequest",
    "AddListItemRequest",
    "UpdateListItemRequest",
    "ListSearchPage",
]
