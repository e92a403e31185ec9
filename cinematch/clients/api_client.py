"""Configured async HTTP client for the CineMatch backend."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

import httpx

from ..constants import EMAIL_NOT_VERIFIED_MARKERS
from ..events import FORCE_LOGOUT, EventEmitter
from ..exceptions import HttpError, RequestTimeoutError, TransportError
from ..storage import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}
_PUBLIC_EXTENSION = "cinematch_public"


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def extract_error_message(payload: Any, default: str = "") -> str:
    """Pull the server-provided message out of an error body."""

    if isinstance(payload, str):
        return payload.strip() or default
    if not isinstance(payload, Mapping):
        return default
    for field in ("message", "detail", "error"):
        value = payload.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
        if isinstance(value, list):
            parts = [str(item) for item in value if item]
            if parts:
                return "; ".join(parts)
    return default


def is_email_not_verified(message: str) -> bool:
    return any(marker in message for marker in EMAIL_NOT_VERIFIED_MARKERS)


class ApiClient:
    """Single configured client that injects the bearer token and handles 401s.

    Request hooks attach ``Authorization: Bearer <token>`` from the token store.
    Response hooks clear the stored token and emit ``FORCE_LOGOUT`` on a 401,
    unless the server says the account email has not been verified yet.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_store: TokenStore,
        events: EventEmitter,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        log_traffic: bool = False,
    ) -> None:
        self._token_store = token_store
        self._events = events
        self._log_traffic = log_traffic
        request_hooks: list[Any] = [self._attach_token]
        response_hooks: list[Any] = [self._handle_unauthorized]
        if log_traffic:
            request_hooks.append(self._log_request)
            response_hooks.insert(0, self._log_response)
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers=DEFAULT_HEADERS,
            transport=transport,
            event_hooks={"request": request_hooks, "response": response_hooks},
        )

    @property
    def events(self) -> EventEmitter:
        return self._events

    async def _attach_token(self, request: httpx.Request) -> None:
        if request.extensions.get(_PUBLIC_EXTENSION):
            return
        try:
            token = await self._token_store.get_token()
        except Exception:
            logger.exception("Could not read auth token; sending request unauthenticated")
            return
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _log_request(self, request: httpx.Request) -> None:
        logger.info("API request %s %s", request.method, request.url)

    async def _log_response(self, response: httpx.Response) -> None:
        request = response.request
        if response.is_error:
            logger.warning("API error %s %s -> %s", request.method, request.url, response.status_code)
        else:
            logger.info("API response %s %s -> %s", request.method, request.url, response.status_code)

    async def _handle_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return
        if response.request.extensions.get(_PUBLIC_EXTENSION):
            return
        await response.aread()
        message = extract_error_message(_decode_body(response))
        if is_email_not_verified(message):
            logger.info("401 for unverified email; keeping session")
            return
        logger.warning("Token expired or invalid; forcing logout")
        try:
            await self._token_store.remove_token()
        finally:
            await self._events.emit_async(FORCE_LOGOUT)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        payload: Any = None,
        timeout: float | None = None,
        public: bool = False,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        ``timeout`` bounds the whole call, not just one network phase.
        ``public`` requests carry no bearer token and never force a logout.
        """

        kwargs: dict[str, Any] = {}
        if public:
            kwargs["extensions"] = {_PUBLIC_EXTENSION: True}
        if params:
            kwargs["params"] = {key: value for key, value in params.items() if value is not None}
        if payload is not None:
            kwargs["json"] = payload
        call = self._client.request(method, path, **kwargs)
        try:
            if timeout is not None:
                response = await asyncio.wait_for(call, timeout)
            else:
                response = await call
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise RequestTimeoutError(f"{method} {path} timed out") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        body = _decode_body(response)
        if response.is_error:
            message = extract_error_message(body, default=response.reason_phrase or "Request failed")
            raise HttpError(response.status_code, message, body)
        return body

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        timeout: float | None = None,
        public: bool = False,
    ) -> Any:
        return await self.request("GET", path, params=params, timeout=timeout, public=public)

    async def post(self, path: str, payload: Any = None, *, public: bool = False) -> Any:
        return await self.request("POST", path, payload=payload, public=public)

    async def put(self, path: str, payload: Any = None) -> Any:
        return await self.request("PUT", path, payload=payload)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()


__all__ = ["ApiClient", "DEFAULT_HEADERS", "extract_error_message", "is_email_not_verified"]
