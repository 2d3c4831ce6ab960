"""Notifier that keeps the notices of one request so the API can return them."""

import logging

from wms.application.interfaces import Notifier
from wms.domain.entities import Notice, NoticeLevel

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    NoticeLevel.SUCCESS: logging.INFO,
    NoticeLevel.INFO: logging.INFO,
    NoticeLevel.WARNING: logging.WARNING,
    NoticeLevel.ERROR: logging.WARNING,
}


class CollectingNotifier(Notifier):
    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)
        logger.log(_LOG_LEVELS[notice.level], "[%s] %s", notice.level.value, notice.message)

    def clear(self) -> None:
        self.notices.clear()
