from .record import Record
from .list_state import (
    STATUS_ALL,
    FilterState,
    SelectionScope,
    SelectionState,
    SortDirection,
    SortState,
)
from .record_event import (
    EventKind,
    RecordArchived,
    RecordCreated,
    RecordDeleted,
    RecordEvent,
    RecordRestored,
    RecordUpdated,
)
from .bulk_result import BulkOperationResult
from .notice import Notice, NoticeLevel
from .notification import Notification
from .user import CurrentUser, ELEVATED_ROLES, Role, has_permission
from .entity_profile import EntityProfile, PROFILES, get_profile, id_prefix_for

__all__ = [
    "Record",
    "STATUS_ALL",
    "FilterState",
    "SelectionScope",
    "SelectionState",
    "SortDirection",
    "SortState",
    "EventKind",
    "RecordArchived",
    "RecordCreated",
    "RecordDeleted",
    "RecordEvent",
    "RecordRestored",
    "RecordUpdated",
    "BulkOperationResult",
    "Notice",
    "NoticeLevel",
    "Notification",
    "CurrentUser",
    "ELEVATED_ROLES",
    "Role",
    "has_permission",
    "EntityProfile",
    "PROFILES",
    "get_profile",
    "id_prefix_for",
]
