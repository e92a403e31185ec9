"""Write-review form: checked client side before anything reaches the network."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..schemas import LogMediaViewRequest
from ..utils.dates import to_firestore_timestamp
from .base import validate_form

REVIEW_MIN_LENGTH = 10
REVIEW_MAX_LENGTH = 5000
NOTES_MAX_LENGTH = 1000


def _blank_to_none(value: Any) -> Any:
    if value is None or (isinstance(value, str) and value == ""):
        return None
    return value


class ReviewForm(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tmdb_id: int
    media_type: str
    had_seen_before: bool
    rating: float | None = None
    review: str | None = None
    notes: str | None = None

    @field_validator("tmdb_id")
    @classmethod
    def positive_tmdb_id(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("El ID debe ser un número positivo")
        return value

    @field_validator("media_type")
    @classmethod
    def known_media_type(cls, value: str) -> str:
        if value not in ("movie", "tv"):
            raise ValueError("El tipo de media debe ser movie o tv")
        return value

    @field_validator("rating", mode="before")
    @classmethod
    def blank_rating(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("rating")
    @classmethod
    def rating_in_range(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError("La calificación mínima es 0")
        if value > 5:
            raise ValueError("La calificación máxima es 5")
        return value

    @field_validator("review", "notes", mode="before")
    @classmethod
    def blank_text(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("review")
    @classmethod
    def review_length(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if len(value) < REVIEW_MIN_LENGTH:
            raise ValueError(f"La review debe tener al menos {REVIEW_MIN_LENGTH} caracteres")
        if len(value) > REVIEW_MAX_LENGTH:
            raise ValueError(f"La review no puede exceder {REVIEW_MAX_LENGTH} caracteres")
        return value

    @field_validator("notes")
    @classmethod
    def notes_length(cls, value: str | None) -> str | None:
        if value is not None and len(value) > NOTES_MAX_LENGTH:
            raise ValueError(f"Las notas no pueden exceder {NOTES_MAX_LENGTH} caracteres")
        return value

    def to_log_request(self, watched_on: date | datetime | None = None, *, review_lang: str = "es") -> LogMediaViewRequest:
        """Build the ``/media-logs`` body, dropping blank optional text."""

        review = self.review.strip() if self.review and self.review.strip() else None
        notes = self.notes.strip() if self.notes and self.notes.strip() else None
        watched_at = None
        if watched_on is not None:
            moment = watched_on if isinstance(watched_on, datetime) else datetime.combine(watched_on, time(), timezone.utc)
            watched_at = to_firestore_timestamp(moment)
        return LogMediaViewRequest(
            tmdb_id=self.tmdb_id,
            media_type=self.media_type,  # type: ignore[arg-type]
            had_seen_before=self.had_seen_before,
            watched_at=watched_at,
            rating=self.rating,
            review=review,
            review_lang=review_lang if review else None,
            notes=notes,
        )


def initial_review_values(tmdb_id: int) -> dict[str, Any]:
    return {"tmdbId": tmdb_id, "mediaType": "movie", "hadSeenBefore": False, "rating": None, "review": "", "notes": ""}


def validate_review_form(data: Mapping[str, Any]) -> tuple[ReviewForm | None, dict[str, str]]:
    """Return the parsed form, or ``None`` plus field messages keyed by Python field name."""

    return validate_form(ReviewForm, data)


__all__ = [
    "ReviewForm",
    "validate_review_form",
    "initial_review_values",
    "REVIEW_MIN_LENGTH",
    "REVIEW_MAX_LENGTH",
    "NOTES_MAX_LENGTH",
]
