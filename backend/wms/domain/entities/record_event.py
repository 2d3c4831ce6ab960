"""Cache transition events emitted after a successful remote mutation."""

from dataclasses import dataclass
from enum import Enum

from .record import Record


class EventKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    ARCHIVED = "archived"
    RESTORED = "restored"
    DELETED = "deleted"


@dataclass(frozen=True)
class RecordCreated:
    record: Record
    kind: EventKind = EventKind.CREATED


@dataclass(frozen=True)
class RecordUpdated:
    record: Record
    kind: EventKind = EventKind.UPDATED


@dataclass(frozen=True)
class RecordArchived:
    record_id: str
    kind: EventKind = EventKind.ARCHIVED


@dataclass(frozen=True)
class RecordRestored:
    record_id: str
    kind: EventKind = EventKind.RESTORED


@dataclass(frozen=True)
class RecordDeleted:
    record_id: str
    kind: EventKind = EventKind.DELETED


RecordEvent = RecordCreated | RecordUpdated | RecordArchived | RecordRestored | RecordDeleted
