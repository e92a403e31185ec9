"""User-curated lists and their items under ``/lists``."""
from __future__ import annotations

from ..schemas import (
    AddListItemRequest,
    CreateListRequest,
    ListItem,
    ListSearchPage,
    MediaList,
    MediaListWithOwner,
    UpdateListItemRequest,
    UpdateListRequest,
)
from .base import BaseService


class ListsService(BaseService):
    base_path = "/lists"

    async def create_list(self, data: CreateListRequest) -> MediaList:
        return self._one(MediaList, await self._api.post(self._path(), data.to_payload()))

    async def get_my_lists(self) -> list[MediaList]:
        return self._many(MediaList, await self._api.get(self._path("my-lists")))

    async def get_user_lists(self, user_id: str) -> list[MediaList]:
        return self._many(MediaList, await self._api.get(self._path("user", user_id)))

    async def get_list_by_id(self, list_id: str) -> MediaList:
        return self._one(MediaList, await self._api.get(self._path(list_id)))

    async def update_list(self, list_id: str, data: UpdateListRequest) -> MediaList:
        return self._one(MediaList, await self._api.put(self._path(list_id), data.to_payload()))

    async def delete_list(self, list_id: str) -> None:
        await self._api.delete(self._path(list_id))

    async def get_list_items(self, list_id: str) -> list[ListItem]:
        return self._many(ListItem, await self._api.get(self._path(list_id, "items")))

    async def add_list_item(self, list_id: str, data: AddListItemRequest) -> ListItem:
        return self._one(ListItem, await self._api.post(self._path(list_id, "items"), data.to_payload()))

    async def update_list_item(self, list_id: str, item_id: str, data: UpdateListItemRequest) -> ListItem:
        payload = await self._api.put(self._path(list_id, "items", item_id), data.to_payload())
        return self._one(ListItem, payload)

    async def remove_list_item(self, list_id: str, item_id: str) -> None:
        await self._api.delete(self._path(list_id, "items", item_id))

    async def search_public_lists(self, query: str, page: int = 1, limit: int = 20) -> list[MediaListWithOwner]:
        payload = await self._api.get(self._path("search"), {"q": query, "page": page, "limit": limit})
        return self._one(ListSearchPage, payload).items

    @staticmethod
    def is_owner(media_list: MediaList, user_id: str) -> bool:
        return media_list.owner_id == user_id


__all__ = ["ListsService"]
