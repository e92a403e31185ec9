"""State for the viewer's lists, a single list page and the add-to-list picker.

Like the other screens, local state only changes after the backend confirms
the write; a failure records a message and leaves the data as it was.
"""
from __future__ import annotations

import asyncio
import logging

from ..schemas import (
    AddListItemRequest,
    CreateListRequest,
    ListItem,
    MediaList,
    TmdbMovie,
    UpdateListRequest,
)
from ..services import ListsService

logger = logging.getLogger(__name__)


def _bump_count(media_list: MediaList, delta: int) -> MediaList:
    return media_list.model_copy(update={"items_count": max(0, media_list.items_count + delta)})


class UserListsState:
    def __init__(self, *, lists_service: ListsService) -> None:
        self._lists = lists_service
        self.lists: list[MediaList] = []
        self.loading = False
        self.refreshing = False
        self.error: str | None = None

    async def load(self, *, refreshing: bool = False) -> None:
        if refreshing:
            self.refreshing = True
        else:
            self.loading = True
        self.error = None
        try:
            self.lists = await self._lists.get_my_lists()
        except Exception:
            logger.exception("Loading lists failed")
            self.error = "No se pudieron cargar las listas. Intenta nuevamente."
        finally:
            self.loading = False
            self.refreshing = False

    async def refresh(self) -> None:
        await self.load(refreshing=True)

    async def create_list(self, data: CreateListRequest) -> MediaList | None:
        try:
            created = await self._lists.create_list(data)
        except Exception:
            logger.exception("Creating list %r failed", data.title)
            self.error = "No se pudo crear la lista. Intenta nuevamente."
            return None
        self.lists = [created, *self.lists]
        return created

    async def delete_list(self, list_id: str) -> bool:
        try:
            await self._lists.delete_list(list_id)
        except Exception:
            logger.exception("Deleting list %s failed", list_id)
            self.error = "No se pudo eliminar la lista. Intenta nuevamente."
            return False
        self.lists = [media_list for media_list in self.lists if media_list.id != list_id]
        return True


class ListDetailsState:
    def __init__(self, list_id: str, *, lists_service: ListsService) -> None:
        self.list_id = list_id
        self._lists = lists_service
        self.list: MediaList | None = None
        self.items: list[ListItem] = []
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        if not self.list_id:
            return
        self.loading = True
        self.error = None
        try:
            media_list, items = await asyncio.gather(
                self._lists.get_list_by_id(self.list_id),
                self._lists.get_list_items(self.list_id),
            )
        except Exception:
            logger.exception("Loading list %s failed", self.list_id)
            self.error = "No se pudieron cargar los detalles de la lista."
            return
        finally:
            self.loading = False
        self.list = media_list
        self.items = items

    async def refresh(self) -> None:
        await self.load()

    async def update_list(self, data: UpdateListRequest) -> MediaList | None:
        try:
            updated = await self._lists.update_list(self.list_id, data)
        except Exception:
            logger.exception("Updating list %s failed", self.list_id)
            self.error = "No se pudo actualizar la lista."
            return None
        self.list = updated
        return updated

    async def add_item(self, data: AddListItemRequest) -> ListItem | None:
        try:
            item = await self._lists.add_list_item(self.list_id, data)
        except Exception:
            logger.exception("Adding %s to list %s failed", data.tmdb_id, self.list_id)
            self.error = "No se pudo agregar el item a la lista."
            return None
        self.items = [item, *self.items]
        if self.list is not None:
            self.list = _bump_count(self.list, 1)
        return item

    async def remove_item(self, item_id: str) -> bool:
        try:
            await self._lists.remove_list_item(self.list_id, item_id)
        except Exception:
            logger.exception("Removing item %s from list %s failed", item_id, self.list_id)
            self.error = "No se pudo eliminar el item de la lista."
            return False
        self.items = [item for item in self.items if item.id != item_id]
        if self.list is not None:
            self.list = _bump_count(self.list, -1)
        return True


class AddToListState:
    """Picker that adds a movie to one of the viewer's lists."""

    def __init__(self, *, lists_service: ListsService) -> None:
        self._lists = lists_service
        self.lists: list[MediaList] = []
        self.loading = False
        self.adding = False
        self.error: str | None = None

    async def load_user_lists(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.lists = await self._lists.get_my_lists()
        except Exception:
            logger.exception("Loading lists for picker failed")
            self.error = "No se pudieron cargar las listas."
        finally:
            self.loading = False

    async def add_to_list(self, list_id: str, movie: TmdbMovie) -> bool:
        body = AddListItemRequest(
            tmdb_id=movie.id,
            media_type="movie",
            title=movie.title,
            poster_path=movie.poster_path or "",
            notes="",
        )
        self.adding = True
        self.error = None
        try:
            await self._lists.add_list_item(list_id, body)
        except Exception:
            logger.exception("Adding movie %s to list %s failed", movie.id, list_id)
            self.error = "No se pudo agregar la película a la lista."
            return False
        finally:
            self.adding = False
        self.lists = [
            _bump_count(media_list, 1) if media_list.id == list_id else media_list for media_list in self.lists
        ]
        return True


__all__ = ["UserListsState", "ListDetailsState", "AddToListState"]
