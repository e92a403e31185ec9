"""Project-wide constant values."""
from __future__ import annotations

from typing import Final

TOKEN_KEY: Final[str] = "@cinematch_app_token"
USER_KEY: Final[str] = "@cinematch_user"

TMDB_IMAGE_BASE_URL: Final[str] = "https://image.tmdb.org/t/p"
DEFAULT_POSTER_SIZE: Final[str] = "w500"

# 401 bodies carrying any of these fragments are not session failures
EMAIL_NOT_VERIFIED_MARKERS: Final[tuple[str, ...]] = (
    "no ha sido verificado",
    "not verified",
    "no está verificado",
    "not been verified",
)

MESSAGE_TYPES: Final[tuple[str, ...]] = ("text", "image", "video", "audio", "file")
MEDIA_TYPES: Final[tuple[str, ...]] = ("movie", "tv")

MAX_STARS: Final[int] = 5

__all__ = [
    "TOKEN_KEY",
    "USER_KEY",
    "TMDB_IMAGE_BASE_URL",
    "DEFAULT_POSTER_SIZE",
    "EMAIL_NOT_VERIFIED_MARKERS",
    "MESSAGE_TYPES",
    "MEDIA_TYPES",
    "MAX_STARS",
]
