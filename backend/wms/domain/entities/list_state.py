"""Value objects describing what a list view currently shows."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

STATUS_ALL = "all"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class SelectionState(str, Enum):
    """Observable checkbox state of the current page."""

    NONE = "none"
    SOME = "some"
    ALL = "all"


class SelectionScope(str, Enum):
    PAGE = "page"
    ALL_PAGES = "all_pages"


@dataclass
class FilterState:
    """Search, status and archive filters of one list view.

    Survives data refreshes; only ``clear()`` resets it.
    """

    search_term: str = ""
    status: str = STATUS_ALL
    show_archived: bool = False
    date_from: date | None = None
    date_to: date | None = None
    field_filters: dict[str, str] = field(default_factory=dict)

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_term
            or self.status != STATUS_ALL
            or self.show_archived
            or self.date_from
            or self.date_to
            or any(value != STATUS_ALL for value in self.field_filters.values())
        )

    def clear(self) -> None:
        self.search_term = ""
        self.status = STATUS_ALL
        self.show_archived = False
        self.date_from = None
        self.date_to = None
        self.field_filters.clear()


@dataclass
class SortState:
    """Single-column sort. ``column is None`` means the filter order is kept."""

    column: str | None = None
    direction: SortDirection = SortDirection.ASC

    @property
    def is_active(self) -> bool:
        return self.column is not None

    def request(self, column: str) -> None:
        """Header click: asc -> desc -> none on the same column, asc on a new one."""
        if self.column == column:
            if self.direction == SortDirection.ASC:
                self.direction = SortDirection.DESC
                return
            self.clear()
            return
        self.column = column
        self.direction = SortDirection.ASC

    def clear(self) -> None:
        self.column = None
        self.direction = SortDirection.ASC
