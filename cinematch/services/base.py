"""Common plumbing for the per-resource backend services."""
from __future__ import annotations

from typing import Any, Iterable, Type, TypeVar

from pydantic import BaseModel

from ..clients.api_client import ApiClient

ModelT = TypeVar("ModelT", bound=BaseModel)


class BaseService:
    """Holds the shared :class:`ApiClient` and validates responses into models."""

    base_path: str = ""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    def _path(self, *parts: Any) -> str:
        return "/".join([self.base_path.rstrip("/"), *(str(part) for part in parts)])

    @staticmethod
    def _one(model: Type[ModelT], payload: Any) -> ModelT:
        return model.model_validate(payload)

    @staticmethod
    def _many(model: Type[ModelT], payload: Iterable[Any] | None) -> list[ModelT]:
        return [model.model_validate(item) for item in payload or []]


__all__ = ["BaseService"]
