"""Exchange a Firebase ID token for a backend session token."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from ..exceptions import HttpError, InvalidArgumentError
from ..schemas import AuthResponse, AuthUser, User
from .base import BaseService

logger = logging.getLogger(__name__)


def _auth_response(payload: Mapping[str, Any]) -> AuthResponse:
    user = payload.get("user") or {}
    email = user.get("email") or ""
    return AuthResponse(
        token=payload["token"],
        user=AuthUser(
            id=user.get("uid") or user.get("id") or "",
            email=email,
            name=user.get("displayName") or email,
            photo_url=user.get("photoURL") or user.get("photoUrl"),
        ),
    )


class AuthService(BaseService):
    base_path = "/auth"

    async def login(self, firebase_token: str) -> AuthResponse:
        """Log in; an unknown account (401/404) is registered instead."""

        if not firebase_token:
            raise InvalidArgumentError("A Firebase ID token is required")
        try:
            payload = await self._api.post(self._path("login"), {"firebaseToken": firebase_token}, public=True)
        except HttpError as exc:
            if exc.status_code in (401, 404):
                logger.info("Backend does not know this account yet; registering")
                return await self.register(firebase_token)
            raise
        return _auth_response(payload)

    async def register(self, firebase_token: str) -> AuthResponse:
        if not firebase_token:
            raise InvalidArgumentError("A Firebase ID token is required")
        payload = await self._api.post(self._path("register"), {"firebaseToken": firebase_token}, public=True)
        return _auth_response(payload)

    async def get_me(self) -> User:
        payload = await self._api.get(self._path("me"))
        return self._one(User, payload)


__all__ = ["AuthService"]
