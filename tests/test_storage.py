"""Token store persistence, validation and graceful fallback."""
from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest
from cryptography.fernet import Fernet

from cinematch.constants import TOKEN_KEY, USER_KEY
from cinematch.exceptions import InvalidArgumentError, StorageUnavailableError
from cinematch.security import build_vault, is_ciphertext
from cinematch.storage import FileStorage, MemoryStorage, StorageBackend, TokenStore, select_storage_backend


def test_token_round_trip() -> None:
    async def scenario() -> tuple[str | None, str | None]:
        store = TokenStore(MemoryStorage())
        await store.save_token("abc")
        saved = await store.get_token()
        await store.remove_token()
        return saved, await store.get_token()

    saved, removed = asyncio.run(scenario())
    assert saved == "abc"
    assert removed is None


@pytest.mark.parametrize("bad", [None, ""])
def test_save_token_rejects_missing_value_without_touching_state(bad: str | None) -> None:
    async def scenario() -> str | None:
        store = TokenStore(MemoryStorage())
        await store.save_token("kept")
        with pytest.raises(InvalidArgumentError):
            await store.save_token(bad)
        return await store.get_token()

    assert asyncio.run(scenario()) == "kept"


def test_user_identity_is_stored_as_json(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"

    async def scenario() -> object:
        store = TokenStore(FileStorage(path))
        await store.save_user_identity({"id": "u1", "name": "Ana"})
        return await store.get_user_identity()

    assert asyncio.run(scenario()) == {"id": "u1", "name": "Ana"}
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert json.loads(on_disk[USER_KEY]) == {"id": "u1", "name": "Ana"}


def test_clear_all_removes_both_keys(tmp_path: Path) -> None:
    backend = FileStorage(tmp_path / "storage.json")

    async def scenario() -> None:
        store = TokenStore(backend)
        await store.save_token("abc")
        await store.save_user_identity({"id": "u1"})
        await store.clear_all()

    asyncio.run(scenario())
    assert backend.get(TOKEN_KEY) is None
    assert backend.get(USER_KEY) is None


def test_corrupt_identity_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    backend = MemoryStorage()
    backend.set(USER_KEY, "{not json")
    store = TokenStore(backend)
    assert asyncio.run(store.get_user_identity()) is None
    assert "not valid JSON" in caplog.text


class BrokenStorage(StorageBackend):
    persistent = True

    def get(self, key: str) -> str | None:
        raise StorageUnavailableError("disk gone")

    def set(self, key: str, value: str) -> None:
        raise StorageUnavailableError("disk gone")

    def remove(self, *keys: str) -> None:
        raise StorageUnavailableError("disk gone")


def test_unavailable_backend_falls_back_to_memory(caplog: pytest.LogCaptureFixture) -> None:
    async def scenario() -> tuple[str | None, bool]:
        store = TokenStore(BrokenStorage())
        await store.save_token("abc")
        return await store.get_token(), store.is_persistent

    token, persistent = asyncio.run(scenario())
    assert token == "abc"
    assert persistent is False
    assert "in-memory storage" in caplog.text


def test_select_storage_backend(tmp_path: Path) -> None:
    assert isinstance(select_storage_backend(tmp_path / "nested" / "storage.json"), FileStorage)
    assert isinstance(select_storage_backend(None), MemoryStorage)


def test_vault_encrypts_token_at_rest() -> None:
    backend = MemoryStorage()
    vault = build_vault(Fernet.generate_key().decode("utf-8"))
    assert vault is not None

    async def scenario() -> str | None:
        store = TokenStore(backend, vault=vault)
        await store.save_token("secret-token")
        return await store.get_token()

    assert asyncio.run(scenario()) == "secret-token"
    raw = backend.get(TOKEN_KEY)
    assert is_ciphertext(raw)
    assert "secret-token" not in (raw or "")


def test_placeholder_vault_key_disables_encryption() -> None:
    assert build_vault("changeme") is None
    assert build_vault(None) is None
