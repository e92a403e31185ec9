"""URL builders for TMDB images and YouTube trailers."""
from __future__ import annotations

from typing import Literal

from ..constants import DEFAULT_POSTER_SIZE, TMDB_IMAGE_BASE_URL

PosterSize = Literal["w92", "w154", "w185", "w342", "w500", "w780", "original"]
BackdropSize = Literal["w300", "w780", "w1280", "original"]
YouTubeQuality = Literal["default", "mqdefault", "hqdefault", "sddefault", "maxresdefault"]

POSTER_SIZES: tuple[str, ...] = ("w92", "w154", "w185", "w342", "w500", "w780", "original")
BACKDROP_SIZES: tuple[str, ...] = ("w300", "w780", "w1280", "original")


def build_image_url(path: str | None, size: str) -> str | None:
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}/{size}{path}"


def build_poster_url(path: str | None, size: str = DEFAULT_POSTER_SIZE) -> str | None:
    return build_image_url(path, size)


def build_backdrop_url(path: str | None, size: str = "w1280") -> str | None:
    return build_image_url(path, size)


def build_profile_url(path: str | None, size: str = "w185") -> str | None:
    return build_image_url(path, size)


def build_logo_url(path: str | None, size: str = "w185") -> str | None:
    return build_image_url(path, size)


def build_original_image_url(path: str | None) -> str | None:
    return build_image_url(path, "original")


def build_poster_srcset(path: str | None) -> dict[str, str | None] | None:
    if not path:
        return None
    return {size: build_image_url(path, size) for size in POSTER_SIZES}


def build_backdrop_srcset(path: str | None) -> dict[str, str | None] | None:
    if not path:
        return None
    return {size: build_image_url(path, size) for size in BACKDROP_SIZES}


def build_youtube_url(key: str) -> str:
    return f"https://www.youtube.com/watch?v={key}"


def build_youtube_thumbnail_url(key: str, quality: YouTubeQuality = "hqdefault") -> str:
    return f"https://img.youtube.com/vi/{key}/{quality}.jpg"


__all__ = [
    "build_image_url",
    "build_poster_url",
    "build_backdrop_url",
    "build_profile_url",
    "build_logo_url",
    "build_original_image_url",
    "build_poster_srcset",
    "build_backdrop_srcset",
    "build_youtube_url",
    "build_youtube_thumbnail_url",
]
