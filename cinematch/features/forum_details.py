"""State for a single forum page: the forum, its posts and post-level actions.

Every mutation waits for the backend to confirm it before local state
changes, and failures leave the posts untouched.
"""
from __future__ import annotations

import asyncio
import logging

from ..schemas import Forum, PostWithAuthor
from ..services import ForumsService
from ..utils.reactions import with_reaction, without_reaction
from .session import SessionManager

logger = logging.getLogger(__name__)

POSTS_PAGE_SIZE = 100


class ForumDetailsState:
    def __init__(self, forum_id: str, *, forums_service: ForumsService, session: SessionManager) -> None:
        self.forum_id = forum_id
        self._forums = forums_service
        self._session = session
        self.forum: Forum | None = None
        self.posts: list[PostWithAuthor] = []
        self.loading = False
        self.refreshing = False
        self.error: str | None = None

    async def load(self, *, refreshing: bool = False) -> None:
        if not self.forum_id:
            return
        if refreshing:
            self.refreshing = True
        else:
            self.loading = True
        self.error = None
        try:
            forum, posts = await asyncio.gather(
                self._forums.get_forum_by_id(self.forum_id),
                self._forums.get_forum_posts(self.forum_id, POSTS_PAGE_SIZE),
            )
        except Exception:
            logger.exception("Loading forum %s failed", self.forum_id)
            self.error = "Error al cargar el foro. Intenta de nuevo."
            return
        finally:
            self.loading = False
            self.refreshing = False
        self.forum = forum
        self.posts = posts

    async def refresh(self) -> None:
        await self.load(refreshing=True)

    async def create_post(self, content: str) -> bool:
        text = content.strip()
        if not text:
            self.error = "El contenido del post no puede estar vacío"
            return False
        self.error = None
        try:
            post = await self._forums.create_post(self.forum_id, text)
        except Exception:
            logger.exception("Creating post in forum %s failed", self.forum_id)
            self.error = "Error al crear el post. Intenta de nuevo."
            return False
        identity = self._session.identity
        entry = PostWithAuthor(
            **post.model_dump(exclude=set(post.model_extra or ())),
            author_display_name=identity.name if identity and identity.name else "Usuario",
            author_photo_url=(identity.photo_url if identity else None) or "",
            comments_count=0,
        )
        self.posts = [entry, *self.posts]
        return True

    async def delete_post(self, post_id: str) -> bool:
        self.error = None
        try:
            await self._forums.delete_post(self.forum_id, post_id)
        except Exception:
            logger.exception("Deleting post %s failed", post_id)
            self.error = "Error al eliminar el post. Intenta de nuevo."
            return False
        self.posts = [post for post in self.posts if post.id != post_id]
        return True

    def _replace_post(self, post_id: str, **changes: object) -> None:
        self.posts = [post.model_copy(update=changes) if post.id == post_id else post for post in self.posts]

    async def add_reaction(self, post_id: str, emoji: str) -> bool:
        identity = self._session.identity
        if identity is None:
            return False
        self.error = None
        try:
            await self._forums.add_reaction_to_post(self.forum_id, post_id, emoji)
        except Exception:
            logger.exception("Adding reaction to post %s failed", post_id)
            self.error = "Error al agregar reacción. Intenta de nuevo."
            return False
        for post in self.posts:
            if post.id == post_id:
                self._replace_post(post_id, reactions=with_reaction(post.reactions, identity.id, emoji))
                break
        return True

    async def remove_reaction(self, post_id: str) -> bool:
        identity = self._session.identity
        if identity is None:
            return False
        self.error = None
        try:
            await self._forums.remove_reaction_from_post(self.forum_id, post_id)
        except Exception:
            logger.exception("Removing reaction from post %s failed", post_id)
            self.error = "Error al quitar reacción. Intenta de nuevo."
            return False
        for post in self.posts:
            if post.id == post_id:
                self._replace_post(post_id, reactions=without_reaction(post.reactions, identity.id))
                break
        return True

    async def create_comment(self, post_id: str, content: str) -> bool:
        text = content.strip()
        if not text:
            self.error = "El comentario no puede estar vacío"
            return False
        self.error = None
        try:
            await self._forums.create_comment(self.forum_id, post_id, text)
        except Exception:
            logger.exception("Commenting on post %s failed", post_id)
            self.error = "Error al crear el comentario. Intenta de nuevo."
            return False
        for post in self.posts:
            if post.id == post_id:
                self._replace_post(post_id, comments_count=post.comments_count + 1)
                break
        return True


__all__ = ["ForumDetailsState", "POSTS_PAGE_SIZE"]
