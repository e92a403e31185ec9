"""A single diary entry: viewing, editing and deleting it."""
from __future__ import annotations

import logging

from ..exceptions import error_message
from ..schemas import MediaLog, UpdateMediaLogRequest
from ..services import MediaLogsService

logger = logging.getLogger(__name__)

REVIEW_LANGUAGE = "es"


def build_log_update(rating: float | None, review: str | None, notes: str | None) -> UpdateMediaLogRequest:
    """Edit-form values as an update body.

    A blank review clears both the review and its language; a blank note is sent as ``""``.
    """

    text = (review or "").strip()
    return UpdateMediaLogRequest(
        rating=rating,
        review=text,
        review_lang=REVIEW_LANGUAGE if text else "",
        notes=(notes or "").strip(),
    )


class LogDetailsState:
    def __init__(self, log_id: str, *, media_logs_service: MediaLogsService) -> None:
        self.log_id = log_id
        self._logs = media_logs_service
        self.log: MediaLog | None = None
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        if not self.log_id:
            return
        self.loading = True
        self.error = None
        try:
            self.log = await self._logs.get_log_by_id(self.log_id)
        except Exception:
            logger.exception("Loading log %s failed", self.log_id)
            self.error = "Failed to load log details"
        finally:
            self.loading = False

    async def refresh(self) -> None:
        await self.load()

    async def delete(self) -> bool:
        try:
            await self._logs.delete_log(self.log_id)
        except Exception:
            logger.exception("Deleting log %s failed", self.log_id)
            self.error = "Failed to delete log"
            return False
        self.log = None
        return True


class EditLogState:
    def __init__(self, *, media_logs_service: MediaLogsService) -> None:
        self._logs = media_logs_service
        self.saving = False
        self.error: str | None = None

    async def update_log(
        self,
        log_id: str,
        *,
        rating: float | None = None,
        review: str | None = None,
        notes: str | None = None,
    ) -> MediaLog | None:
        self.saving = True
        self.error = None
        try:
            return await self._logs.update_log(log_id, build_log_update(rating, review, notes))
        except Exception as exc:
            logger.exception("Updating log %s failed", log_id)
            self.error = error_message(exc, "Unknown error occurred")
            return None
        finally:
            self.saving = False


__all__ = ["LogDetailsState", "EditLogState", "build_log_update"]
