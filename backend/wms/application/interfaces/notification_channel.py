"""Abstract notification side channel (port)."""

from abc import ABC, abstractmethod

from wms.domain.entities import Notification


class NotificationChannel(ABC):
    """Stores notifications addressed to roles (e.g. Owner/Admin)."""

    @abstractmethod
    async def create_notification(self, notification: Notification) -> Notification:
        ...

    @abstractmethod
    async def list_for_role(self, role: str) -> list[Notification]:
        ...
