"""HTTP client behaviour: bearer token injection, 401 handling and error mapping."""
from __future__ import annotations

import asyncio

import httpx
import pytest

from cinematch.events import FORCE_LOGOUT, EventEmitter
from cinematch.exceptions import HttpError, RequestTimeoutError, TransportError
from cinematch.storage import MemoryStorage, TokenStore

from conftest import build_api, json_response


def _run_unauthorized(message: str) -> tuple[str | None, int]:
    async def scenario() -> tuple[str | None, int]:
        store = TokenStore(MemoryStorage())
        await store.save_token("abc")
        events = EventEmitter()
        fired: list[str] = []
        events.on(FORCE_LOGOUT, lambda: fired.append("logout"))
        api = build_api(
            lambda request: json_response(401, {"message": message}),
            token_store=store,
            events=events,
        )
        async with api:
            with pytest.raises(HttpError) as excinfo:
                await api.get("/users/me")
        assert excinfo.value.status_code == 401
        return await store.get_token(), len(fired)

    return asyncio.run(scenario())


@pytest.mark.parametrize(
    "message",
    [
        "Your email has not been verified",
        "Email not verified",
        "El correo no ha sido verificado",
        "Tu correo no está verificado",
    ],
)
def test_unverified_email_401_keeps_session(message: str) -> None:
    token, fired = _run_unauthorized(message)
    assert token == "abc"
    assert fired == 0


def test_other_401_clears_token_and_fires_one_logout() -> None:
    token, fired = _run_unauthorized("Token expired")
    assert token is None
    assert fired == 1


def test_bearer_token_attached_when_present() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return json_response(200, {"ok": True})

    async def scenario() -> None:
        store = TokenStore(MemoryStorage())
        async with build_api(handler, token_store=store) as api:
            await api.get("/a")
            await store.save_token("tok-1")
            await api.get("/b")

    asyncio.run(scenario())
    assert seen == [None, "Bearer tok-1"]


def test_public_requests_skip_token_and_logout() -> None:
    seen: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers.get("Authorization"))
        return json_response(401, {"message": "Invalid firebase token"})

    async def scenario() -> tuple[str | None, int]:
        store = TokenStore(MemoryStorage())
        await store.save_token("abc")
        events = EventEmitter()
        fired: list[int] = []
        events.on(FORCE_LOGOUT, lambda: fired.append(1))
        async with build_api(handler, token_store=store, events=events) as api:
            with pytest.raises(HttpError):
                await api.post("/auth/login", {"firebaseToken": "x"}, public=True)
        return await store.get_token(), len(fired)

    token, fired = asyncio.run(scenario())
    assert seen == [None]
    assert token == "abc"
    assert fired == 0


def test_error_status_raises_http_error_with_server_message() -> None:
    async def scenario() -> HttpError:
        api = build_api(lambda request: json_response(422, {"message": ["title is required", "bad type"]}))
        async with api:
            with pytest.raises(HttpError) as excinfo:
                await api.post("/forums", {})
        return excinfo.value

    error = asyncio.run(scenario())
    assert error.status_code == 422
    assert error.message == "title is required; bad type"


def test_none_params_are_dropped() -> None:
    urls: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        urls.append(request.url)
        return json_response(200, [])

    async def scenario() -> None:
        async with build_api(handler) as api:
            await api.get("/matches", {"maxDaysAgo": 30, "minRating": None})

    asyncio.run(scenario())
    assert urls[0].params.get("maxDaysAgo") == "30"
    assert "minRating" not in urls[0].params


def test_transport_failures_are_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async def scenario() -> None:
        async with build_api(handler) as api:
            await api.get("/users/me")

    with pytest.raises(TransportError):
        asyncio.run(scenario())


def test_deadline_raises_request_timeout() -> None:
    async def slow_handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return json_response(200, [])

    async def scenario() -> None:
        async with build_api(slow_handler) as api:  # type: ignore[arg-type]
            await api.get("/tmdb/posters/top-rated", timeout=0.05)

    with pytest.raises(RequestTimeoutError):
        asyncio.run(scenario())
