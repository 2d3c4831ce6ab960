"""Notification channel that stores notifications as ``notifications`` records."""

from wms.application.interfaces import NotificationChannel, RecordService
from wms.domain.entities import Notification, Record
from wms.domain.entities.entity_profile import NOTIFICATIONS


class RecordNotificationChannel(NotificationChannel):
    """Implements the NotificationChannel port on top of any RecordService."""

    def __init__(self, service: RecordService):
        self._service = service

    @staticmethod
    def _to_notification(record: Record) -> Notification:
        return Notification(
            id=record.id,
            type=record.get("type", "info"),
            title=record.get("title", ""),
            message=record.get("message", ""),
            target_roles=list(record.get("targetRoles") or []),
            created_by=record.created_by,
            reference_id=record.get("referenceId"),
            read=bool(record.get("read", False)),
            created_at=record.created_at,
        )

    async def create_notification(self, notification: Notification) -> Notification:
        record = await self._service.create(
            NOTIFICATIONS.entity_type,
            notification.to_data(),
            created_by=notification.created_by,
        )
        return self._to_notification(record)

    async def list_for_role(self, role: str) -> list[Notification]:
        records = await self._service.list_records(NOTIFICATIONS.entity_type)
        notifications = [
            self._to_notification(r) for r in records if not r.archived
        ]
        visible = [n for n in notifications if n.is_visible_to(role)]
        return sorted(visible, key=lambda n: n.created_at, reverse=True)
