"""Domain entity — a single row of any warehouse collection."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

_MISSING = object()

# Attributes that live on the entity itself rather than in ``data``.
_TOP_LEVEL_FIELDS = frozenset({
    "id",
    "entity_type",
    "archived",
    "archived_at",
    "created_by",
    "created_at",
    "updated_at",
})


@dataclass
class Record:
    """Core domain entity shared by every collection (sales orders, inventory, ...).

    Domain-specific fields are kept in ``data`` so one generic list core can
    search, sort and mutate any collection. ``archived`` is the soft-delete
    flag; archived records stay in the store until permanently deleted.
    """

    id: str
    entity_type: str
    data: dict[str, Any] = field(default_factory=dict)
    archived: bool = False
    archived_at: datetime | None = None
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def get(self, path: str, default: Any = None) -> Any:
        """Resolve a field by name or dotted path (e.g. ``shipping.city``)."""
        head, _, rest = path.partition(".")
        if head in _TOP_LEVEL_FIELDS:
            value: Any = getattr(self, head)
        else:
            value = self.data.get(head, _MISSING)
            if value is _MISSING:
                return default

        for part in rest.split(".") if rest else ():
            if isinstance(value, dict):
                value = value.get(part, _MISSING)
            else:
                value = getattr(value, part, _MISSING)
            if value is _MISSING or value is None:
                return default
        return value

    def update(self, data: dict[str, Any]) -> None:
        """Merge changed fields into ``data`` and refresh the updated_at timestamp."""
        self.data = {**self.data, **data}
        self.updated_at = datetime.now(timezone.utc)

    def archive(self) -> None:
        self.archived = True
        self.archived_at = datetime.now(timezone.utc)
        self.updated_at = self.archived_at

    def restore(self) -> None:
        self.archived = False
        self.archived_at = None
        self.updated_at = datetime.now(timezone.utc)
