"""Schemas for watch logs, the backend media cache and proxied TMDB payloads."""
from __future__ import annotations

from typing import Any, Dict, Generic, List, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import ApiModel, MediaType, Timestamp

T = TypeVar("T")


class MediaLog(ApiModel):
    id: str
    user_id: str
    tmdb_id: int
    media_type: MediaType
    watched_at: Timestamp = None
    had_seen_before: bool = False
    rating: float | None = None
    review: str | None = None
    review_lang: str | None = None
    notes: str | None = None
    created_at: Timestamp = None
    updated_at: Timestamp = None


class LogMediaViewRequest(ApiModel):
    tmdb_id: int
    media_type: MediaType
    had_seen_before: bool = False
    watched_at: Dict[str, int] | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review: str | None = None
    review_lang: str | None = None
    notes: str | None = None


class UpdateMediaLogRequest(ApiModel):
    rating: float | None = Field(default=None, ge=0, le=5)
    review: str | None = None
    review_lang: str | None = None
    notes: str | None = None


class UserMediaStats(ApiModel):
    total_movies_watched: int = 0
    total_tv_shows_watched: int = 0
    total_views: int = 0
    total_reviews: int = 0
    average_rating: float = 0.0
    last_watched_at: Timestamp = None


class MediaCache(ApiModel):
    tmdb_id: int
    media_type: MediaType
    title: str = ""
    poster_path: str | None = ""
    release_year: int | None = None
    genres: List[int] = Field(default_factory=list)
    vote_average: float = 0.0
    updated_at: Timestamp = None
    overview: str | None = None
    backdrop_path: str | None = None
    runtime: int | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    status: str | None = None


class HybridResponse(ApiModel):
    source: Literal["cache", "tmdb"]
    data: MediaCache


class CacheStats(ApiModel):
    total_cached: int = 0
    movies_cached: int = 0
    tv_cached: int = 0


class TopRatedPoster(ApiModel):
    tmdb_id: int
    title: str = ""
    poster_path: str | None = ""
    vote_average: float = 0.0
    vote_count: int = 0


class TmdbModel(BaseModel):
    """TMDB responses are proxied verbatim, so fields stay snake_case."""

    model_config = ConfigDict(extra="allow")


class TmdbGenre(TmdbModel):
    id: int
    name: str


class TmdbMovie(TmdbModel):
    id: int
    title: str = ""
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    genre_ids: List[int] = Field(default_factory=list)


class TmdbMovieDetails(TmdbMovie):
    genres: List[TmdbGenre] = Field(default_factory=list)
    runtime: int | None = None
    tagline: str | None = None
    status: str | None = None


class TmdbTVShow(TmdbModel):
    id: int
    name: str = ""
    overview: str = ""
    poster_path: str | None = None
    backdrop_path: str | None = None
    first_air_date: str | None = None
    vote_average: float = 0.0
    vote_count: int = 0
    genre_ids: List[int] = Field(default_factory=list)


class TmdbTVShowDetails(TmdbTVShow):
    genres: List[TmdbGenre] = Field(default_factory=list)
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    episode_run_time: List[int] = Field(default_factory=list)
    status: str | None = None


class TmdbCastMember(TmdbModel):
    id: int
    name: str
    character: str = ""
    profile_path: str | None = None
    order: int = 0


class TmdbCrewMember(TmdbModel):
    id: int
    name: str
    job: str = ""
    department: str = ""
    profile_path: str | None = None


class TmdbCredits(TmdbModel):
    id: int | None = None
    cast: List[TmdbCastMember] = Field(default_factory=list)
    crew: List[TmdbCrewMember] = Field(default_factory=list)


class TmdbWatchProvider(TmdbModel):
    provider_id: int
    provider_name: str
    logo_path: str | None = None
    display_priority: int = 0


class TmdbCountryProviders(TmdbModel):
    link: str | None = None
    flatrate: List[TmdbWatchProvider] = Field(default_factory=list)
    rent: List[TmdbWatchProvider] = Field(default_factory=list)
    buy: List[TmdbWatchProvider] = Field(default_factory=list)


class TmdbWatchProviders(TmdbModel):
    id: int | None = None
    results: Dict[str, TmdbCountryProviders] = Field(default_factory=dict)

    def for_region(self, region: str) -> TmdbCountryProviders | None:
        return self.results.get(region.upper())


class TmdbGenres(TmdbModel):
    genres: List[TmdbGenre] = Field(default_factory=list)


class Paginated(TmdbModel, Generic[T]):
    page: int = 1
    results: List[T] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0

    @field_validator("results", mode="before")
    @classmethod
    def none_results_to_empty(cls, value: Any) -> Any:
        return value or []


__all__ = [
    "MediaLog",
    "LogMediaViewRequest",
    "UpdateMediaLogRequest",
    "UserMediaStats",
    "MediaCache",
    "HybridResponse",
    "CacheStats",
    "TopRatedPoster",
    "TmdbModel",
    "TmdbGenre",
    "TmdbMovie",
    "TmdbMovieDetails",
    "TmdbTVShow",
    "TmdbTVShowDetails",
    "TmdbCastMember",
    "TmdbCrewMember",
    "TmdbCredits",
    "TmdbWatchProvider",
    "TmdbCountryProviders",
    "TmdbWatchProviders",
    "TmdbGenres",
    "Paginated",
]
