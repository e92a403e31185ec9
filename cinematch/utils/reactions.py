"""Helpers for inline ``user id -> emoji`` reaction maps."""
from __future__ import annotations

from collections import Counter
from typing import Mapping

DEFAULT_REACTIONS: list[str] = ["👍", "❤️", "😂", "🔥"]


def group_reactions(reactions: Mapping[str, str] | None) -> dict[str, int]:
    """Count reactions per emoji, ordered by first appearance; the counts sum to ``len(reactions)``."""

    if not reactions:
        return {}
    return dict(Counter(reactions.values()))


def count_reactions(reactions: Mapping[str, str] | None) -> int:
    return len(reactions or {})


def get_my_reaction(reactions: Mapping[str, str] | None, my_user_id: str) -> str | None:
    return (reactions or {}).get(my_user_id) or None


def with_reaction(reactions: Mapping[str, str] | None, user_id: str, emoji: str) -> dict[str, str]:
    """Copy of ``reactions`` where ``user_id`` holds exactly ``emoji``."""

    updated = dict(reactions or {})
    updated[user_id] = emoji
    return updated


def without_reaction(reactions: Mapping[str, str] | None, user_id: str) -> dict[str, str]:
    updated = dict(reactions or {})
    updated.pop(user_id, None)
    return updated


__all__ = [
    "DEFAULT_REACTIONS",
    "group_reactions",
    "count_reactions",
    "get_my_reaction",
    "with_reaction",
    "without_reaction",
]
