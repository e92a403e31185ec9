"""State for the watch diary: the viewer's logs, stats and edits."""
from __future__ import annotations

import asyncio
import logging

from ..schemas import MediaLog, UpdateMediaLogRequest, UserMediaStats
from ..services import MediaLogsService

logger = logging.getLogger(__name__)

PAGE_SIZE = 20


class DiaryState:
    """Logs grow by ``PAGE_SIZE`` per :meth:`load_more`; edits land after the server confirms them."""

    def __init__(self, *, media_logs_service: MediaLogsService, page_size: int = PAGE_SIZE) -> None:
        self._logs_service = media_logs_service
        self._page_size = page_size
        self.limit = page_size
        self.logs: list[MediaLog] = []
        self.stats: UserMediaStats | None = None
        self.is_loading = False
        self.has_more = True
        self.error: str | None = None

    async def load(self) -> bool:
        self.is_loading = True
        self.error = None
        try:
            logs, stats = await asyncio.gather(
                self._logs_service.get_my_logs(self.limit),
                self._logs_service.get_my_stats(),
            )
        except Exception:
            logger.exception("Loading diary failed")
            self.error = "Error al cargar el diario"
            return False
        finally:
            self.is_loading = False
        self.logs = logs
        self.stats = stats
        self.has_more = len(logs) == self.limit
        return True

    async def load_more(self) -> None:
        if not self.has_more or self.is_loading:
            return
        previous = self.limit
        self.limit += self._page_size
        if not await self.load():
            self.limit = previous

    async def delete_log(self, log_id: str) -> bool:
        try:
            await self._logs_service.delete_log(log_id)
        except Exception:
            logger.exception("Deleting log %s failed", log_id)
            self.error = "Error al eliminar el registro"
            return False
        self.logs = [log for log in self.logs if log.id != log_id]
        return True

    async def update_log(self, log_id: str, changes: UpdateMediaLogRequest) -> MediaLog | None:
        try:
            updated = await self._logs_service.update_log(log_id, changes)
        except Exception:
            logger.exception("Updating log %s failed", log_id)
            self.error = "Error al actualizar el registro"
            return None
        self.logs = [updated if log.id == log_id else log for log in self.logs]
        return updated


__all__ = ["DiaryState", "PAGE_SIZE"]
