"""Realtime chat state kept in step with Firestore snapshot listeners."""
from .chat_list import ChatListSync
from .chat_messages import ChatMessagesSync, SyncState
from .reconcile import apply_changes

__all__ = ["ChatListSync", "ChatMessagesSync", "SyncState", "apply_changes"]
