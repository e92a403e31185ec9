"""Profiles, favourites and follow relationships under ``/users``."""
from __future__ import annotations

from datetime import date
from typing import Any

from ..schemas import (
    AddFavoriteRequest,
    CreateUserRequest,
    FavoriteItem,
    FollowEntry,
    MediaType,
    UpdateUserRequest,
    User,
    UserProfile,
)
from ..utils.dates import coerce_timestamp, format_long_date
from ..utils.images import build_poster_url
from .base import BaseService


class UsersService(BaseService):
    base_path = "/users"

    async def get_user_by_id(self, uid: str) -> User:
        return self._one(User, await self._api.get(self._path(uid)))

    async def get_user_profile(self, uid: str) -> UserProfile:
        return self._one(UserProfile, await self._api.get(self._path(uid, "profile")))

    async def update_my_profile(self, data: UpdateUserRequest) -> User:
        return self._one(User, await self._api.put(self._path("me"), data.to_payload()))

    async def create_user(self, data: CreateUserRequest) -> User:
        return self._one(User, await self._api.post(self._path(), data.to_payload()))

    async def delete_my_account(self) -> None:
        await self._api.delete(self._path("me"))

    async def get_my_favorites(self) -> list[FavoriteItem]:
        return self._many(FavoriteItem, await self._api.get(self._path("me", "favorites")))

    async def get_user_favorites(self, uid: str) -> list[FavoriteItem]:
        return self._many(FavoriteItem, await self._api.get(self._path(uid, "favorites")))

    async def add_to_favorites(self, favorite: AddFavoriteRequest) -> None:
        await self._api.post(self._path("me", "favorites"), favorite.to_payload())

    async def remove_from_favorites(self, tmdb_id: int, media_type: MediaType) -> None:
        await self._api.delete(self._path("me", "favorites", tmdb_id, media_type))

    async def is_favorite(self, tmdb_id: int, media_type: MediaType) -> bool:
        favorites = await self.get_my_favorites()
        return any(item.tmdb_id == tmdb_id and item.media_type == media_type for item in favorites)

    async def follow_user(self, target_uid: str) -> None:
        await self._api.post(self._path("follow", target_uid))

    async def unfollow_user(self, target_uid: str) -> None:
        await self._api.delete(self._path("follow", target_uid))

    async def is_following(self, target_uid: str) -> bool:
        payload = await self._api.get(self._path("me", "following", target_uid))
        return bool((payload or {}).get("isFollowing"))

    async def get_my_followers(self, limit: int = 50) -> list[FollowEntry]:
        return self._many(FollowEntry, await self._api.get(self._path("me", "followers"), {"limit": limit}))

    async def get_my_following(self, limit: int = 50) -> list[FollowEntry]:
        return self._many(FollowEntry, await self._api.get(self._path("me", "following"), {"limit": limit}))

    async def get_user_followers(self, uid: str, limit: int = 50) -> list[FollowEntry]:
        return self._many(FollowEntry, await self._api.get(self._path(uid, "followers"), {"limit": limit}))

    async def get_user_following(self, uid: str, limit: int = 50) -> list[FollowEntry]:
        return self._many(FollowEntry, await self._api.get(self._path(uid, "following"), {"limit": limit}))

    async def search_users(self, query: str, limit: int = 20) -> list[User]:
        """Search by display name; a blank query returns ``[]`` without a request."""

        if not query.strip():
            return []
        return self._many(User, await self._api.get(self._path(), {"q": query, "limit": limit}))

    @staticmethod
    def build_poster_url(poster_path: str | None, size: str = "w500") -> str | None:
        return build_poster_url(poster_path, size)

    @staticmethod
    def format_date(value: Any) -> str:
        moment = value if isinstance(value, date) else coerce_timestamp(value)
        return format_long_date(moment) if moment else ""

    @staticmethod
    def get_initials(display_name: str) -> str:
        return "".join(word[0] for word in display_name.split() if word).upper()[:2]


__all__ = ["UsersService"]
