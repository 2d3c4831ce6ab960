from .collecting_notifier import CollectingNotifier
from .record_notification_channel import RecordNotificationChannel

__all__ = [
    "CollectingNotifier",
    "RecordNotificationChannel",
]
