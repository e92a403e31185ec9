"""Clients for the REST backend and the realtime store."""
from .api_client import ApiClient, extract_error_message, is_email_not_verified
from .firestore_listener import (
    ChangeEvent,
    FirestoreQuerySource,
    FirestoreSourceFactory,
    ListenerFactory,
    SnapshotSource,
    Unsubscribe,
    get_firestore_client,
)

__all__ = [
    "ApiClient",
    "extract_error_message",
    "is_email_not_verified",
    "ChangeEvent",
    "FirestoreQuerySource",
    "FirestoreSourceFactory",
    "ListenerFactory",
    "SnapshotSource",
    "Unsubscribe",
    "get_firestore_client",
]
