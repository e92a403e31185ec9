"""Pure helpers: stars, reactions, dates and image URLs."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cinematch.schemas import Message, Post
from cinematch.utils import (
    build_poster_url,
    coerce_timestamp,
    count_reactions,
    format_days_ago,
    format_elapsed_long,
    format_elapsed_short,
    format_long_date,
    format_relative_date,
    format_short_date,
    group_reactions,
    render_stars,
    star_breakdown,
)
from cinematch.utils.reactions import with_reaction, without_reaction

NOW = datetime(2025, 11, 7, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("rating", [0, 0.5, 1, 2.4, 2.5, 3.7, 4.5, 5])
def test_star_breakdown_always_totals_five(rating: float) -> None:
    parts = star_breakdown(rating)
    assert parts.full_stars + int(parts.has_half_star) + parts.empty_stars == 5


def test_star_breakdown_clamps_out_of_range() -> None:
    assert star_breakdown(7).full_stars == 5
    assert star_breakdown(-1).empty_stars == 5
    assert render_stars(3.5) == "⭐⭐⭐½☆"


def test_group_reactions_counts_each_emoji() -> None:
    reactions = {"u1": "🔥", "u2": "🔥", "u3": "😂"}
    grouped = group_reactions(reactions)
    assert grouped == {"🔥": 2, "😂": 1}
    assert sum(grouped.values()) == len(reactions)
    assert group_reactions(None) == {}


def test_group_reactions_agrees_with_count() -> None:
    reactions = {"u1": "🔥", "u2": ""}
    assert sum(group_reactions(reactions).values()) == count_reactions(reactions) == 2


def test_stored_reactions_drop_empty_emoji() -> None:
    message = Message.model_validate({"id": "m1", "senderId": "u1", "reactions": {"u1": "🔥", "u2": ""}})
    post = Post.model_validate({"id": "p1", "authorId": "u1", "content": "hola", "reactions": None})
    assert message.reactions == {"u1": "🔥"}
    assert group_reactions(message.reactions) == {"🔥": 1}
    assert post.reactions == {}


def test_reaction_updates_do_not_mutate_input() -> None:
    original = {"u1": "🔥"}
    assert with_reaction(original, "u1", "😂") == {"u1": "😂"}
    assert without_reaction(original, "u1") == {}
    assert original == {"u1": "🔥"}


def test_coerce_timestamp_accepts_backend_shapes() -> None:
    expected = datetime(2025, 11, 7, tzinfo=timezone.utc)
    seconds = int(expected.timestamp())
    assert coerce_timestamp({"_seconds": seconds, "_nanoseconds": 0}) == expected
    assert coerce_timestamp("2025-11-07T00:00:00Z") == expected
    assert coerce_timestamp(datetime(2025, 11, 7)) == expected
    assert coerce_timestamp(None) is None
    with pytest.raises(ValueError):
        coerce_timestamp({"nope": 1})


def test_date_labels() -> None:
    day = datetime(2025, 11, 7, tzinfo=timezone.utc)
    assert format_short_date(day) == "7 nov 2025"
    assert format_long_date(day) == "7 de noviembre de 2025"


@pytest.mark.parametrize(
    ("delta", "label"),
    [
        (timedelta(hours=2), "Hoy"),
        (timedelta(days=1), "Ayer"),
        (timedelta(days=3), "Hace 3 días"),
        (timedelta(days=7), "Hace 1 semana"),
        (timedelta(days=60), "Hace 2 meses"),
        (timedelta(days=400), "Hace 1 año"),
    ],
)
def test_format_relative_date(delta: timedelta, label: str) -> None:
    assert format_relative_date(NOW - delta, now=NOW) == label


def test_elapsed_labels() -> None:
    assert format_elapsed_short(NOW - timedelta(seconds=20), now=NOW) == "Ahora"
    assert format_elapsed_short(NOW - timedelta(minutes=5), now=NOW) == "5m"
    assert format_elapsed_short(NOW - timedelta(hours=3), now=NOW) == "3h"
    assert format_elapsed_short(NOW - timedelta(days=10), now=NOW) == "28 oct"
    assert format_elapsed_long(NOW - timedelta(minutes=5), now=NOW) == "Hace unos minutos"
    assert format_elapsed_long(NOW - timedelta(days=2), now=NOW) == "Hace 2d"


def test_format_days_ago() -> None:
    assert format_days_ago(0) == "Hoy"
    assert format_days_ago(1) == "Ayer"
    assert format_days_ago(14) == "Hace 2 semanas"
    assert format_days_ago(30) == "Hace 1 mes"


def test_poster_url() -> None:
    assert build_poster_url("/abc.jpg") == "https://image.tmdb.org/t/p/w500/abc.jpg"
    assert build_poster_url("/abc.jpg", "w185") == "https://image.tmdb.org/t/p/w185/abc.jpg"
    assert build_poster_url("") is None
    assert build_poster_url(None) is None
