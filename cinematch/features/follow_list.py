"""Followers or followed accounts of one user."""
from __future__ import annotations

import logging
from typing import Literal

from ..exceptions import InvalidArgumentError, error_message
from ..schemas import FollowEntry
from ..services import UsersService

logger = logging.getLogger(__name__)

FollowListKind = Literal["followers", "following"]


class FollowListState:
    def __init__(
        self,
        kind: FollowListKind,
        user_id: str,
        *,
        users_service: UsersService,
        limit: int = 50,
    ) -> None:
        if kind not in ("followers", "following"):
            raise InvalidArgumentError(f"Unknown follow list kind: {kind!r}")
        self.kind = kind
        self.user_id = user_id
        self.limit = limit
        self._users = users_service
        self.users: list[FollowEntry] = []
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        if not self.user_id:
            return
        self.loading = True
        self.error = None
        try:
            if self.kind == "followers":
                entries = await self._users.get_user_followers(self.user_id, self.limit)
            else:
                entries = await self._users.get_user_following(self.user_id, self.limit)
        except Exception as exc:
            logger.exception("Loading %s of %s failed", self.kind, self.user_id)
            self.error = error_message(exc, f"Error al cargar {self.kind}")
            return
        finally:
            self.loading = False
        self.users = entries

    async def refresh(self) -> None:
        await self.load()


__all__ = ["FollowListState", "FollowListKind"]
