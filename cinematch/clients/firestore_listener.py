"""Realtime snapshot listeners over Firestore queries."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Protocol, Sequence

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1 import FieldFilter

from ..config import Settings
from ..exceptions import ListenerError

logger = logging.getLogger(__name__)

ChangeType = Literal["added", "modified", "removed"]
Unsubscribe = Callable[[], None]
ChangesHandler = Callable[[Sequence["ChangeEvent"]], None]
ErrorHandler = Callable[[BaseException], None]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """One incremental change delivered by a snapshot listener."""

    type: ChangeType
    doc_id: str
    data: dict[str, Any] = field(default_factory=dict)


class SnapshotSource(Protocol):
    """A live query that reports change batches until unsubscribed."""

    def listen(self, on_changes: ChangesHandler, on_error: ErrorHandler) -> Unsubscribe: ...


class ListenerFactory(Protocol):
    """Creates the realtime sources used by the chat syncs."""

    def chat_messages(self, chat_id: str, *, limit: int) -> SnapshotSource: ...

    def user_chats(self, user_id: str, *, limit: int) -> SnapshotSource: ...


def _change_type(raw: Any) -> ChangeType:
    name = getattr(raw, "name", str(raw)).lower()
    if name not in ("added", "modified", "removed"):
        raise ListenerError(f"Unknown change type: {raw!r}")
    return name  # type: ignore[return-value]


class FirestoreQuerySource:
    """Adapts ``Query.on_snapshot`` to :class:`SnapshotSource`.

    Firestore delivers snapshots on its own worker thread; batches are handed
    to the asyncio loop that called :meth:`listen` so state containers are
    only ever touched from that loop.
    """

    def __init__(self, query: Any) -> None:
        self._query = query

    def listen(self, on_changes: ChangesHandler, on_error: ErrorHandler) -> Unsubscribe:
        loop = asyncio.get_running_loop()

        def _callback(_docs: Any, changes: Any, _read_time: Any) -> None:
            try:
                batch = [
                    ChangeEvent(
                        type=_change_type(change.type),
                        doc_id=change.document.id,
                        data=change.document.to_dict() or {},
                    )
                    for change in changes
                ]
            except Exception as exc:
                loop.call_soon_threadsafe(on_error, exc)
                return
            loop.call_soon_threadsafe(on_changes, batch)

        watch = self._query.on_snapshot(_callback)
        return watch.unsubscribe


def get_firestore_client(settings: Settings) -> Any:
    """Return a Firestore client, initialising the default Firebase app once."""

    try:
        app = firebase_admin.get_app()
    except ValueError:
        cred = credentials.Certificate(settings.firebase_credentials) if settings.firebase_credentials else None
        options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
        app = firebase_admin.initialize_app(cred, options)
        logger.info("Initialised Firebase app %s", app.name)
    return firestore.client(app)


def chat_messages_query(db: Any, chat_id: str, *, limit: int) -> Any:
    return (
        db.collection("chats")
        .document(chat_id)
        .collection("messages")
        .order_by("createdAt", direction=firestore.Query.DESCENDING)
        .limit(limit)
    )


def user_chats_query(db: Any, user_id: str, *, limit: int) -> Any:
    return (
        db.collection("chats")
        .where(filter=FieldFilter("members", "array_contains", user_id))
        .order_by("lastMessageAt", direction=firestore.Query.DESCENDING)
        .limit(limit)
    )


class FirestoreSourceFactory:
    """Builds listener sources for the chat syncs from one Firestore client."""

    def __init__(self, db: Any) -> None:
        self._db = db

    def chat_messages(self, chat_id: str, *, limit: int) -> SnapshotSource:
        return FirestoreQuerySource(chat_messages_query(self._db, chat_id, limit=limit))

    def user_chats(self, user_id: str, *, limit: int) -> SnapshotSource:
        return FirestoreQuerySource(user_chats_query(self._db, user_id, limit=limit))


__all__ = [
    "ChangeEvent",
    "ChangeType",
    "SnapshotSource",
    "ListenerFactory",
    "Unsubscribe",
    "FirestoreQuerySource",
    "FirestoreSourceFactory",
    "get_firestore_client",
    "chat_messages_query",
    "user_chats_query",
]
