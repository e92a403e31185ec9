"""Utilities for reading sensitive configuration without leaking values."""
from __future__ import annotations

from typing import Final

__all__ = ["is_placeholder", "clean_secret"]


_PLACEHOLDER_VALUES: Final[set[str]] = {
    "changeme",
    "change-me",
    "placeholder",
    "example",
    "sample",
    "your-key-here",
}


def is_placeholder(value: str | None) -> bool:
    if not value:
        return True
    normalized = value.strip().lower()
    return not normalized or normalized in _PLACEHOLDER_VALUES


def clean_secret(value: str | None) -> str | None:
    """Return a trimmed secret, or ``None`` when unset or a placeholder."""

    if is_placeholder(value):
        return None
    return value.strip()  # type: ignore[union-attr]
