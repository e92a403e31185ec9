"""Merge snapshot change batches into a locally held ordered sequence."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, TypeVar

from ..clients.firestore_listener import ChangeEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")


def apply_changes(
    entries: list[T],
    changes: Iterable[ChangeEvent],
    *,
    key: Callable[[T], str],
    build: Callable[[str, Mapping[str, Any]], T],
) -> list[T]:
    """Return a new list with ``changes`` applied in delivery order.

    ``added`` prepends unless the id is already present, ``modified`` replaces
    in place and ``removed`` drops the entry. Ids that are not held locally
    are ignored by ``modified`` and ``removed``. A document that ``build``
    rejects with ``ValueError`` is logged and skipped; the rest of the batch
    still applies.
    """

    result = list(entries)
    for change in changes:
        if change.type == "removed":
            result = [entry for entry in result if key(entry) != change.doc_id]
            continue
        if change.type == "added" and any(key(entry) == change.doc_id for entry in result):
            continue
        try:
            built = build(change.doc_id, change.data)
        except ValueError as exc:
            logger.warning("Skipping malformed document %s in %s change: %s", change.doc_id, change.type, exc)
            continue
        if change.type == "added":
            result.insert(0, built)
            continue
        for index, entry in enumerate(result):
            if key(entry) == change.doc_id:
                result[index] = built
                break
    return result


__all__ = ["apply_changes"]
