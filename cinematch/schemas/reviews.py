"""Review cards shown on the home feed and on title detail pages.

Friend activity entries carry the reviewed title (``tmdbId`` and poster) while
per-title user reviews do not; both share the reviewer and rating fields.
"""
from __future__ import annotations

from typing import Annotated, Any, List, Literal, Mapping, Union

from pydantic import Field, TypeAdapter

from .base import ApiModel, MediaType, Timestamp


class _ReviewFields(ApiModel):
    id: str | None = None
    user_id: str
    user_name: str | None = None
    user_photo: str | None = None
    rating: float | None = None
    review: str | None = None
    review_lang: str | None = None
    watched_at: Timestamp = None
    created_at: Timestamp = None

    @property
    def has_text(self) -> bool:
        return bool(self.review and self.review.strip())


class FriendActivityReview(_ReviewFields):
    kind: Literal["friend_activity"] = "friend_activity"
    tmdb_id: int
    media_type: MediaType = "movie"
    title: str | None = None
    poster_path: str | None = None


class UserReview(_ReviewFields):
    kind: Literal["user_review"] = "user_review"


class MediaDetailsWithReviews(ApiModel):
    """Cached title details plus the reviews users have written for it."""

    reviews: List[UserReview] = Field(default_factory=list)


ReviewLike = Annotated[Union[FriendActivityReview, UserReview], Field(discriminator="kind")]

_review_adapter: TypeAdapter[Any] = TypeAdapter(ReviewLike)


def parse_review_like(data: Mapping[str, Any]) -> FriendActivityReview | UserReview:
    """Tag a raw payload by the presence of ``tmdbId`` and validate it."""

    if "kind" in data:
        return _review_adapter.validate_python(dict(data))
    kind = "friend_activity" if ("tmdbId" in data or "tmdb_id" in data) else "user_review"
    return _review_adapter.validate_python({**data, "kind": kind})


__all__ = ["FriendActivityReview", "UserReview", "MediaDetailsWithReviews", "ReviewLike", "parse_review_like"]
