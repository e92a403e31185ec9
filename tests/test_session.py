"""Session lifecycle: sign-in, restore, debounced refresh and forced logout."""
from __future__ import annotations

import asyncio

import httpx
import pytest
from conftest import build_api, json_response

from cinematch.events import FORCE_LOGOUT, EventEmitter
from cinematch.exceptions import HttpError
from cinematch.features.session import SessionManager
from cinematch.services import AuthService
from cinematch.storage import MemoryStorage, TokenStore

AUTH_PAYLOAD = {
    "token": "jwt",
    "user": {"uid": "u1", "email": "ana@example.com", "displayName": "Ana", "photoURL": "https://img/a.png"},
}


class Backend:
    def __init__(self) -> None:
        self.me_calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path == "/auth/login":
            return json_response(200, AUTH_PAYLOAD)
        if path == "/auth/me":
            self.me_calls += 1
            return json_response(200, {"id": "u1", "displayName": "Ana", "followingCount": self.me_calls})
        if path == "/users/me":
            return json_response(401, {"message": "Token expirado"})
        return json_response(404)


def _session(backend: Backend, store: TokenStore, events: EventEmitter, delay: float = 0.01) -> SessionManager:
    api = build_api(backend, token_store=store, events=events)
    return SessionManager(auth_service=AuthService(api), token_store=store, events=events, refresh_delay=delay)


def test_login_persists_token_and_identity() -> None:
    store = TokenStore(MemoryStorage())
    session = _session(Backend(), store, EventEmitter())

    async def scenario() -> tuple[str | None, object]:
        await session.login_with_firebase_token("firebase-token")
        return await store.get_token(), await store.get_user_identity()

    token, identity = asyncio.run(scenario())
    assert token == "jwt"
    assert identity == {"id": "u1", "email": "ana@example.com", "name": "Ana", "photoUrl": "https://img/a.png"}
    assert session.is_authenticated
    assert session.identity is not None and session.identity.name == "Ana"


def test_restore_uses_persisted_session() -> None:
    backend = MemoryStorage()
    first = _session(Backend(), TokenStore(backend), EventEmitter())
    asyncio.run(first.login_with_firebase_token("firebase-token"))

    second = _session(Backend(), TokenStore(backend), EventEmitter())
    assert asyncio.run(second.restore()) is True
    assert second.identity is not None and second.identity.id == "u1"


def test_restore_without_token_is_signed_out() -> None:
    session = _session(Backend(), TokenStore(MemoryStorage()), EventEmitter())
    assert asyncio.run(session.restore()) is False
    assert not session.is_authenticated


def test_refresh_triggers_collapse_into_one_fetch() -> None:
    backend = Backend()
    session = _session(backend, TokenStore(MemoryStorage()), EventEmitter(), delay=0.02)

    async def scenario() -> None:
        await session.login_with_firebase_token("firebase-token")
        session.refresh_user_data()
        session.refresh_user_data()
        session.refresh_user_data()
        await asyncio.sleep(0.1)
        await session.flush_refresh()

    asyncio.run(scenario())
    assert backend.me_calls == 1
    assert session.user is not None and session.user.following_count == 1


def test_flush_runs_pending_refresh_immediately() -> None:
    backend = Backend()
    session = _session(backend, TokenStore(MemoryStorage()), EventEmitter(), delay=60)

    async def scenario() -> None:
        await session.login_with_firebase_token("firebase-token")
        session.refresh_user_data()
        await session.flush_refresh()

    asyncio.run(scenario())
    assert backend.me_calls == 1


def test_unauthorized_response_signs_session_out() -> None:
    store = TokenStore(MemoryStorage())
    events = EventEmitter()
    backend = Backend()
    session = _session(backend, store, events)
    api = build_api(backend, token_store=store, events=events)

    async def scenario() -> tuple[str | None, object]:
        await session.login_with_firebase_token("firebase-token")
        with pytest.raises(HttpError):
            await api.get("/users/me")
        return await store.get_token(), await store.get_user_identity()

    token, identity = asyncio.run(scenario())
    assert token is None
    assert identity is None
    assert not session.is_authenticated


def test_logout_clears_storage() -> None:
    store = TokenStore(MemoryStorage())
    events = EventEmitter()
    session = _session(Backend(), store, events)

    async def scenario() -> str | None:
        await session.login_with_firebase_token("firebase-token")
        await session.logout()
        return await store.get_token()

    assert asyncio.run(scenario()) is None
    assert session.identity is None

    session.close()
    assert events.listener_count(FORCE_LOGOUT) == 0
