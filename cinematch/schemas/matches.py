"""Schemas for users who watched the same title recently."""
from __future__ import annotations

from typing import List

from pydantic import Field

from .base import ApiModel, Timestamp, photo_url_field


class PotentialMatch(ApiModel):
    user_id: str
    display_name: str | None = None
    photo_url: str = photo_url_field()
    movie_id: int
    movie_title: str | None = None
    movie_poster_path: str | None = None
    their_watched_at: Timestamp = None
    my_watched_at: Timestamp = None
    days_ago: int = 0
    my_rating: float | None = None
    their_rating: float | None = None


class MatchesResponse(ApiModel):
    matches: List[PotentialMatch] = Field(default_factory=list)
    total: int = 0


__all__ = ["PotentialMatch", "MatchesResponse"]
