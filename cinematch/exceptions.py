"""Exception hierarchy shared by the client layers."""
from __future__ import annotations

from typing import Any


class CineMatchError(RuntimeError):
    """Base class for client errors."""


class InvalidArgumentError(CineMatchError, ValueError):
    """Raised when a caller passes a value the operation cannot accept."""


class StorageUnavailableError(CineMatchError):
    """Raised by a storage backend that cannot read or write its medium."""


class VaultError(CineMatchError):
    """Raised when a stored value cannot be encrypted or decrypted."""


class TransportError(CineMatchError):
    """Raised when the backend cannot be reached."""


class RequestTimeoutError(TransportError, TimeoutError):
    """Raised when a request exceeds its deadline."""


class HttpError(CineMatchError):
    """Non-2xx response carrying the status and the server message."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


class ListenerError(CineMatchError):
    """Raised inside a realtime subscription."""


def error_message(exc: BaseException, default: str) -> str:
    """Return the user-facing text for ``exc`` or ``default`` when it has none."""

    if isinstance(exc, HttpError):
        return exc.message or default
    text = str(exc).strip()
    return text or default


__all__ = [
    "CineMatchError",
    "InvalidArgumentError",
    "StorageUnavailableError",
    "VaultError",
    "TransportError",
    "RequestTimeoutError",
    "HttpError",
    "ListenerError",
    "error_message",
]
