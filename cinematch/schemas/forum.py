"""Schemas for discussion forums, posts and comments."""
from __future__ import annotations

from pydantic import Field

from .base import ApiModel, Reactions, Timestamp, photo_url_field


class Forum(ApiModel):
    id: str
    owner_id: str
    title: str
    description: str = ""
    created_at: Timestamp = None
    updated_at: Timestamp = None


class ForumSummary(ApiModel):
    forum_id: str
    title: str
    description: str = ""
    owner_id: str
    owner_display_name: str = ""
    posts_count: int = 0
    last_post_at: Timestamp = None


class Post(ApiModel):
    id: str
    author_id: str
    content: str
    reactions: Reactions = Field(default_factory=dict)
    created_at: Timestamp = None


class PostWithAuthor(Post):
    author_display_name: str = ""
    author_photo_url: str = photo_url_field("authorPhotoURL", "authorPhotoUrl")
    comments_count: int = 0


class Comment(ApiModel):
    id: str
    author_id: str
    content: str
    created_at: Timestamp = None


class CommentWithAuthor(Comment):
    author_display_name: str = ""
    author_photo_url: str = photo_url_field("authorPhotoURL", "authorPhotoUrl")


class CreateForumRequest(ApiModel):
    title: str = Field(..., min_length=1)
    description: str = ""


class UpdateForumRequest(ApiModel):
    title: str | None = None
    description: str | None = None


class ContentRequest(ApiModel):
    """Body shared by post create/update and comment create."""

    content: str = Field(..., min_length=1)


__all__ = [
    "Forum",
    "ForumSummary",
    "Post",
    "PostWithAuthor",
    "Comment",
    "CommentWithAuthor",
    "CreateForumRequest",
    "UpdateForumRequest",
    "ContentRequest",
]
