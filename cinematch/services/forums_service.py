"""Forums, their posts and comments under ``/forums``."""
from __future__ import annotations

from typing import Any, Mapping

from ..schemas import (
    AddReactionRequest,
    Comment,
    CommentWithAuthor,
    ContentRequest,
    CreateForumRequest,
    Forum,
    ForumSummary,
    Post,
    PostWithAuthor,
    UpdateForumRequest,
)
from ..utils.dates import coerce_timestamp, format_elapsed_long
from ..utils.reactions import count_reactions, get_my_reaction
from .base import BaseService


class ForumsService(BaseService):
    base_path = "/forums"

    async def create_forum(self, title: str, description: str) -> Forum:
        body = CreateForumRequest(title=title, description=description)
        return self._one(Forum, await self._api.post(self._path(), body.to_payload()))

    async def get_all_forums(self, limit: int = 50) -> list[ForumSummary]:
        return self._many(ForumSummary, await self._api.get(self._path(), {"limit": limit}))

    async def get_forums_by_owner(self, owner_id: str, limit: int = 100) -> list[ForumSummary]:
        """Forums created by ``owner_id``, filtered from the newest ``limit`` forums."""

        return [forum for forum in await self.get_all_forums(limit) if forum.owner_id == owner_id]

    async def search_forums(self, query: str, limit: int = 100) -> list[ForumSummary]:
        """Case-insensitive match on title or description; a blank query returns ``[]``."""

        needle = query.strip().lower()
        if not needle:
            return []
        return [
            forum
            for forum in await self.get_all_forums(limit)
            if needle in forum.title.lower() or needle in forum.description.lower()
        ]

    async def get_forum_by_id(self, forum_id: str) -> Forum:
        return self._one(Forum, await self._api.get(self._path(forum_id)))

    async def update_forum(self, forum_id: str, data: UpdateForumRequest) -> Forum:
        return self._one(Forum, await self._api.put(self._path(forum_id), data.to_payload()))

    async def delete_forum(self, forum_id: str) -> None:
        await self._api.delete(self._path(forum_id))

    async def create_post(self, forum_id: str, content: str) -> Post:
        body = ContentRequest(content=content)
        return self._one(Post, await self._api.post(self._path(forum_id, "posts"), body.to_payload()))

    async def get_forum_posts(self, forum_id: str, limit: int = 50) -> list[PostWithAuthor]:
        payload = await self._api.get(self._path(forum_id, "posts"), {"limit": limit})
        return self._many(PostWithAuthor, payload)

    async def get_post_by_id(self, forum_id: str, post_id: str) -> PostWithAuthor:
        return self._one(PostWithAuthor, await self._api.get(self._path(forum_id, "posts", post_id)))

    async def update_post(self, forum_id: str, post_id: str, content: str) -> Post:
        body = ContentRequest(content=content)
        return self._one(Post, await self._api.put(self._path(forum_id, "posts", post_id), body.to_payload()))

    async def delete_post(self, forum_id: str, post_id: str) -> None:
        await self._api.delete(self._path(forum_id, "posts", post_id))

    async def add_reaction_to_post(self, forum_id: str, post_id: str, emoji: str) -> None:
        body = AddReactionRequest(emoji=emoji)
        await self._api.post(self._path(forum_id, "posts", post_id, "reactions"), body.to_payload())

    async def remove_reaction_from_post(self, forum_id: str, post_id: str) -> None:
        await self._api.delete(self._path(forum_id, "posts", post_id, "reactions"))

    async def create_comment(self, forum_id: str, post_id: str, content: str) -> Comment:
        body = ContentRequest(content=content)
        payload = await self._api.post(self._path(forum_id, "posts", post_id, "comments"), body.to_payload())
        return self._one(Comment, payload)

    async def get_post_comments(self, forum_id: str, post_id: str, limit: int = 100) -> list[CommentWithAuthor]:
        payload = await self._api.get(self._path(forum_id, "posts", post_id, "comments"), {"limit": limit})
        return self._many(CommentWithAuthor, payload)

    async def delete_comment(self, forum_id: str, post_id: str, comment_id: str) -> None:
        await self._api.delete(self._path(forum_id, "posts", post_id, "comments", comment_id))

    @staticmethod
    def is_owner(forum: Forum, my_user_id: str) -> bool:
        return forum.owner_id == my_user_id

    @staticmethod
    def is_post_author(post: Post, my_user_id: str) -> bool:
        return post.author_id == my_user_id

    @staticmethod
    def format_timestamp(value: Any) -> str:
        moment = coerce_timestamp(value)
        return format_elapsed_long(moment) if moment else ""

    @staticmethod
    def count_reactions(reactions: Mapping[str, str] | None) -> int:
        return count_reactions(reactions)

    @staticmethod
    def get_my_reaction(reactions: Mapping[str, str] | None, my_user_id: str) -> str | None:
        return get_my_reaction(reactions, my_user_id)


__all__ = ["ForumsService"]
