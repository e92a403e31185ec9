"""Device key-value storage for the session token and cached user identity."""
from __future__ import annotations

import asyncio
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, TypeVar

from .constants import TOKEN_KEY, USER_KEY
from .exceptions import InvalidArgumentError, StorageUnavailableError
from .security.vault import TokenVault

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StorageBackend(ABC):
    """Synchronous key-value capability used by :class:`TokenStore`."""

    persistent: bool = False

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove(self, *keys: str) -> None: ...


class MemoryStorage(StorageBackend):
    """In-process mapping; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, *keys: str) -> None:
        for key in keys:
            self._values.pop(key, None)


class FileStorage(StorageBackend):
    """JSON document on disk holding every key."""

    persistent = True

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning("Storage file %s is corrupt; starting empty", self.path)
            return {}
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot read {self.path}") from exc
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageUnavailableError(f"Cannot write {self.path}") from exc

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove(self, *keys: str) -> None:
        with self._lock:
            data = self._load()
            changed = False
            for key in keys:
                if data.pop(key, None) is not None:
                    changed = True
            if changed:
                self._dump(data)


def select_storage_backend(path: str | os.PathLike[str] | None) -> StorageBackend:
    """Pick the durable backend when ``path`` is usable, otherwise memory."""

    if path is None:
        logger.warning("No storage path configured; session data will not persist")
        return MemoryStorage()
    target = Path(path).expanduser()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        logger.warning("Storage directory %s is unavailable; falling back to memory", target.parent)
        return MemoryStorage()
    if not os.access(target.parent, os.W_OK) or (target.exists() and not os.access(target, os.R_OK | os.W_OK)):
        logger.warning("Storage file %s is not writable; falling back to memory", target)
        return MemoryStorage()
    return FileStorage(target)


class TokenStore:
    """Async facade over a :class:`StorageBackend` for auth session data."""

    def __init__(self, backend: StorageBackend | None = None, *, vault: TokenVault | None = None) -> None:
        self._backend = backend if backend is not None else MemoryStorage()
        self._vault = vault

    @property
    def backend(self) -> StorageBackend:
        return self._backend

    @property
    def is_persistent(self) -> bool:
        return self._backend.persistent

    async def _run(self, operation: Callable[[StorageBackend], T]) -> T:
        backend = self._backend
        try:
            if backend.persistent:
                return await asyncio.to_thread(operation, backend)
            return operation(backend)
        except StorageUnavailableError:
            if backend is not self._backend:
                # another call already switched backends
                return operation(self._backend)
            logger.warning("Device storage unavailable; continuing with in-memory storage", exc_info=True)
            self._backend = MemoryStorage()
            return operation(self._backend)

    async def save_token(self, token: str | None) -> None:
        if not token:
            raise InvalidArgumentError("Token is required and cannot be empty")
        stored = self._vault.encrypt_text(token) if self._vault else token
        await self._run(lambda backend: backend.set(TOKEN_KEY, stored))

    async def get_token(self) -> str | None:
        raw = await self._run(lambda backend: backend.get(TOKEN_KEY))
        if raw is None:
            return None
        if self._vault is not None:
            return self._vault.decrypt_text(raw)
        return raw

    async def remove_token(self) -> None:
        await self._run(lambda backend: backend.remove(TOKEN_KEY))

    async def save_user_identity(self, user: Any) -> None:
        payload = json.dumps(user, default=str, ensure_ascii=False)
        await self._run(lambda backend: backend.set(USER_KEY, payload))

    async def get_user_identity(self) -> Any | None:
        raw = await self._run(lambda backend: backend.get(USER_KEY))
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Cached user identity is not valid JSON; ignoring it")
            return None

    async def remove_user_identity(self) -> None:
        await self._run(lambda backend: backend.remove(USER_KEY))

    async def clear_all(self) -> None:
        await self._run(lambda backend: backend.remove(TOKEN_KEY, USER_KEY))


__all__ = [
    "StorageBackend",
    "MemoryStorage",
    "FileStorage",
    "select_storage_backend",
    "TokenStore",
]
