"""Submit a watch log with an optional review."""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

from ..exceptions import error_message
from ..services import MediaLogsService
from ..validation.review import validate_review_form

logger = logging.getLogger(__name__)


class WriteReviewState:
    def __init__(self, *, media_logs_service: MediaLogsService) -> None:
        self._logs = media_logs_service
        self.is_submitting = False
        self.error: str | None = None
        self.field_errors: dict[str, str] = {}

    async def submit(self, data: Mapping[str, Any], watched_on: date | None = None) -> bool:
        """Validate ``data`` and post it; invalid forms never reach the backend."""

        form, errors = validate_review_form(data)
        self.field_errors = errors
        if form is None:
            return False
        self.is_submitting = True
        self.error = None
        try:
            await self._logs.log_view(form.to_log_request(watched_on))
        except Exception as exc:
            logger.exception("Submitting review for %s failed", form.tmdb_id)
            self.error = error_message(exc, "Error al enviar la review")
            return False
        finally:
            self.is_submitting = False
        return True


__all__ = ["WriteReviewState"]
