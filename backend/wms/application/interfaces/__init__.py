from .record_service import RecordService
from .notifier import Notifier
from .notification_channel import NotificationChannel

__all__ = [
    "RecordService",
    "Notifier",
    "NotificationChannel",
]
