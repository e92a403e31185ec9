"""Shared fakes for the client tests."""
from __future__ import annotations

import json
from typing import Any, Callable, Sequence

import httpx
import pytest

from cinematch.application import Application
from cinematch.clients.api_client import ApiClient
from cinematch.clients.firestore_listener import ChangeEvent
from cinematch.config import Settings
from cinematch.events import EventEmitter
from cinematch.storage import MemoryStorage, TokenStore

Handler = Callable[[httpx.Request], httpx.Response]


class FakeSource:
    """In-memory SnapshotSource that lets a test push change batches."""

    def __init__(self) -> None:
        self.on_changes: Callable[[Sequence[ChangeEvent]], None] | None = None
        self.on_error: Callable[[BaseException], None] | None = None
        self.listen_calls = 0
        self.unsubscribed = False

    def listen(self, on_changes, on_error):  # type: ignore[no-untyped-def]
        self.listen_calls += 1
        self.on_changes = on_changes
        self.on_error = on_error

        def _unsubscribe() -> None:
            self.unsubscribed = True

        return _unsubscribe

    @property
    def attached(self) -> bool:
        return self.on_changes is not None and not self.unsubscribed

    def push(self, *changes: ChangeEvent) -> None:
        assert self.on_changes is not None, "listener not attached"
        self.on_changes(list(changes))

    def fail(self, exc: BaseException) -> None:
        assert self.on_error is not None, "listener not attached"
        self.on_error(exc)


class FakeSourceFactory:
    def __init__(self) -> None:
        self.messages: dict[str, FakeSource] = {}
        self.chats: dict[str, FakeSource] = {}
        self.limits: list[int] = []

    def chat_messages(self, chat_id: str, *, limit: int) -> FakeSource:
        self.limits.append(limit)
        return self.messages.setdefault(chat_id, FakeSource())

    def user_chats(self, user_id: str, *, limit: int) -> FakeSource:
        self.limits.append(limit)
        return self.chats.setdefault(user_id, FakeSource())


def json_response(status_code: int, payload: Any = None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status_code)
    return httpx.Response(status_code, content=json.dumps(payload), headers={"Content-Type": "application/json"})


def build_api(
    handler: Handler,
    *,
    token_store: TokenStore | None = None,
    events: EventEmitter | None = None,
) -> ApiClient:
    return ApiClient(
        "https://api.test",
        token_store=token_store or TokenStore(MemoryStorage()),
        events=events or EventEmitter(),
        transport=httpx.MockTransport(handler),
    )


AUTH_PAYLOAD = {"token": "jwt", "user": {"uid": "me", "email": "me@example.com", "displayName": "Yo"}}


class Backend:
    """Routes keyed by ``"METHOD /path"``; records every request it serves."""

    def __init__(self) -> None:
        self.routes: dict[str, Any] = {
            "POST /auth/login": json_response(200, AUTH_PAYLOAD),
            "GET /auth/me": json_response(200, {"id": "me", "displayName": "Yo"}),
        }
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> Any:
        self.requests.append(request)
        route = self.routes.get(f"{request.method} {request.url.path}")
        if route is None:
            return json_response(404, {"message": "not found"})
        if isinstance(route, httpx.Response):
            return route
        return route(request)

    def paths(self, method: str) -> list[str]:
        return [request.url.path for request in self.requests if request.method == method]

    def bodies(self, method: str, path: str) -> list[Any]:
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == method and request.url.path == path
        ]


def build_app(backend: Backend, **overrides: Any) -> Application:
    settings = Settings(
        api_base_url="https://api.test",
        refresh_debounce=0.01,
        search_debounce=0.01,
        movie_search_debounce=0.01,
        **overrides,
    )
    return Application.create(
        settings,
        transport=httpx.MockTransport(backend),
        storage=MemoryStorage(),
        source_factory=FakeSourceFactory(),
    )


@pytest.fixture()
def source_factory() -> FakeSourceFactory:
    return FakeSourceFactory()


@pytest.fixture()
def token_store() -> TokenStore:
    return TokenStore(MemoryStorage())
