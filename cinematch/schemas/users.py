"""Schemas for users, profiles, favourites and follow relationships."""
from __future__ import annotations

from typing import Any, List, Literal

from pydantic import Field

from .base import ApiModel, MediaType, Timestamp, photo_url_field

AuthProviderType = Literal["google", "facebook", "apple", "email"]


class FavoriteItem(ApiModel):
    tmdb_id: int
    title: str = ""
    media_type: MediaType
    poster_path: str | None = ""
    added_at: Timestamp = None


class PrivacySettings(ApiModel):
    show_email: bool = False
    show_birthdate: bool = False


class UserSettings(ApiModel):
    language: str = "es"
    region: str = ""
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)


class User(ApiModel):
    id: str
    display_name: str = ""
    email: str = ""
    photo_url: str = photo_url_field()
    bio: str | None = ""
    birthdate: str | None = None
    favorites: List[FavoriteItem] = Field(default_factory=list)
    followers_count: int = 0
    following_count: int = 0
    settings: UserSettings | None = None
    email_verified: bool = False
    created_at: Timestamp = None
    updated_at: Timestamp = None


class ProfileStats(ApiModel):
    total_favorites: int = 0
    followers_count: int = 0
    following_count: int = 0
    total_movies_watched: int = 0
    total_tv_shows_watched: int = 0
    total_views: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0


class UserProfile(ApiModel):
    user: dict[str, Any]
    stats: ProfileStats = Field(default_factory=ProfileStats)
    recent_favorites: List[FavoriteItem] = Field(default_factory=list)
    recent_logs: List[dict[str, Any]] = Field(default_factory=list)
    recent_reviews: List[dict[str, Any]] = Field(default_factory=list)


class UpdateUserRequest(ApiModel):
    display_name: str | None = None
    photo_url: str | None = Field(default=None, serialization_alias="photoURL")
    bio: str | None = None
    birthdate: str | None = None
    settings: dict[str, Any] | None = None


class CreateUserRequest(ApiModel):
    uid: str
    display_name: str
    email: str
    photo_url: str | None = Field(default=None, serialization_alias="photoURL")
    bio: str | None = None
    birthdate: str | None = None
    email_verified: bool | None = None


class AddFavoriteRequest(ApiModel):
    tmdb_id: int
    title: str
    media_type: MediaType
    poster_path: str = ""


class FollowEntry(ApiModel):
    uid: str
    display_name: str = ""
    photo_url: str = photo_url_field()
    bio: str | None = ""
    followed_at: Timestamp = None


class AuthUser(ApiModel):
    id: str
    email: str = ""
    name: str = ""
    photo_url: str | None = photo_url_field("photoUrl", "photoURL")


class AuthResponse(ApiModel):
    token: str
    user: AuthUser


__all__ = [
    "AuthProviderType",
    "FavoriteItem",
    "PrivacySettings",
    "UserSettings",
    "User",
    "ProfileStats",
    "UserProfile",
    "UpdateUserRequest",
    "CreateUserRequest",
    "AddFavoriteRequest",
    "FollowEntry",
    "AuthUser",
    "AuthResponse",
]
