"""In-memory error log fed by the application's top-level exception handler."""

import logging
import traceback
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class ErrorReport:
    error_type: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    stack: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorReporter:
    """Keeps the most recent ``max_entries`` unhandled errors (oldest dropped first)."""

    def __init__(self, max_entries: int = 100):
        self._reports: deque[ErrorReport] = deque(maxlen=max_entries)

    def report(self, error: BaseException, context: dict[str, Any] | None = None) -> ErrorReport:
        entry = ErrorReport(
            error_type=type(error).__name__,
            message=str(error),
            context=dict(context or {}),
            stack="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        )
        self._reports.append(entry)
        logger.debug("Reported %s (%d kept)", entry.error_type, len(self._reports))
        return entry

    def recent(self) -> list[ErrorReport]:
        """Newest first."""
        return list(reversed(self._reports))

    def clear(self) -> None:
        self._reports.clear()

    def __len__(self) -> int:
        return len(self._reports)
