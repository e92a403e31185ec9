"""Pure helpers shared by services and state containers."""
from .dates import (
    coerce_timestamp,
    format_days_ago,
    format_elapsed_long,
    format_elapsed_short,
    format_input_date,
    format_long_date,
    format_relative_date,
    format_short_date,
    to_firestore_timestamp,
)
from .images import build_backdrop_url, build_poster_url, build_profile_url
from .ratings import StarBreakdown, generate_star_rating, render_stars, star_breakdown, validate_rating
from .reactions import count_reactions, get_my_reaction, group_reactions

__all__ = [
    "coerce_timestamp",
    "format_days_ago",
    "format_elapsed_long",
    "format_elapsed_short",
    "format_input_date",
    "format_long_date",
    "format_relative_date",
    "format_short_date",
    "to_firestore_timestamp",
    "build_backdrop_url",
    "build_poster_url",
    "build_profile_url",
    "StarBreakdown",
    "generate_star_rating",
    "render_stars",
    "star_breakdown",
    "validate_rating",
    "count_reactions",
    "get_my_reaction",
    "group_reactions",
]
