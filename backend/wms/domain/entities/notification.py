"""Domain entity — an in-app notification addressed to a set of roles."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class Notification:
    """Persisted side-channel message (e.g. a customer placed a sales order)."""

    type: str
    title: str
    message: str
    target_roles: list[str] = field(default_factory=list)
    created_by: str | None = None
    reference_id: str | None = None
    read: bool = False
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_visible_to(self, role: str) -> bool:
        return not self.target_roles or role in self.target_roles

    def to_data(self) -> dict[str, Any]:
        """Field dict used when storing the notification as a record."""
        return {
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "targetRoles": list(self.target_roles),
            "referenceId": self.reference_id,
            "read": self.read,
        }
