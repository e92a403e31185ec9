"""Star-rating decomposition for 0-5 ratings."""
from __future__ import annotations

import math
from dataclasses import dataclass

from ..constants import MAX_STARS


@dataclass(frozen=True, slots=True)
class StarBreakdown:
    full_stars: int
    has_half_star: bool
    empty_stars: int


def validate_rating(rating: float) -> float:
    """Clamp ``rating`` into the 0-5 range."""

    return max(0.0, min(float(MAX_STARS), rating))


def star_breakdown(rating: float) -> StarBreakdown:
    value = validate_rating(rating)
    full = math.floor(value)
    half = (value % 1) >= 0.5
    empty = MAX_STARS - full - (1 if half else 0)
    return StarBreakdown(full_stars=full, has_half_star=half, empty_stars=empty)


def render_stars(rating: float) -> str:
    """``⭐⭐⭐½☆`` style text for list rows."""

    parts = star_breakdown(rating)
    return "⭐" * parts.full_stars + ("½" if parts.has_half_star else "") + "☆" * parts.empty_stars


def generate_star_rating(rating: float) -> str:
    """``★★★½☆`` style text for detail views."""

    parts = star_breakdown(rating)
    return "★" * parts.full_stars + ("½" if parts.has_half_star else "") + "☆" * parts.empty_stars


__all__ = ["StarBreakdown", "star_breakdown", "render_stars", "generate_star_rating", "validate_rating"]
