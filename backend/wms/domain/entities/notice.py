"""User-facing toast messages produced by the list core."""

from dataclasses import dataclass
from enum import Enum


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(NoticeLevel.SUCCESS, message)

    @classmethod
    def info(cls, message: str) -> "Notice":
        return cls(NoticeLevel.INFO, message)

    @classmethod
    def warning(cls, message: str) -> "Notice":
        return cls(NoticeLevel.WARNING, message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(NoticeLevel.ERROR, message)
