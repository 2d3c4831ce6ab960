"""Filter/search engine — narrows a loaded collection to what the view shows."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import date, datetime
from typing import Any

from wms.domain.entities import STATUS_ALL, EntityProfile, FilterState, Record

logger = logging.getLogger(__name__)

# Marks a search path that walks into a list, e.g. ``items[].itemName``.
_LIST_MARKER = "[]"


def _search_values(record: Record, path: str) -> list[Any]:
    """Collect the values a search path points at (several for list paths)."""
    if _LIST_MARKER not in path:
        return [record.get(path)]

    list_path, _, item_field = path.partition(_LIST_MARKER)
    item_field = item_field.lstrip(".")
    values = []
    for entry in record.get(list_path) or []:
        if isinstance(entry, dict):
            values.append(entry.get(item_field) if item_field else entry)
        else:
            values.append(entry)
    return values


def parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except ValueError:
            return None
    return None


class FilterEngine:
    """Applies archived, owner, search, status, field and date predicates in one pass.

    Input order is preserved; sorting happens downstream.
    """

    def __init__(self, profile: EntityProfile):
        self._profile = profile

    def matches_search(self, record: Record, term: str) -> bool:
        if not term:
            return True
        needle = term.casefold()
        for path in self._profile.search_fields:
            for value in _search_values(record, path):
                if value is not None and needle in str(value).casefold():
                    return True
        return False

    def matches_status(self, record: Record, status: str) -> bool:
        if status == STATUS_ALL or self._profile.status_field is None:
            return True
        return record.get(self._profile.status_field) == status

    def matches_fields(self, record: Record, field_filters: dict[str, str]) -> bool:
        for name in self._profile.filter_fields:
            wanted = field_filters.get(name, STATUS_ALL)
            if wanted != STATUS_ALL and record.get(name) != wanted:
                return False
        return True

    def matches_date_range(
        self, record: Record, date_from: date | None, date_to: date | None
    ) -> bool:
        if not (date_from or date_to) or self._profile.date_field is None:
            return True
        value = parse_date(record.get(self._profile.date_field))
        # Rows whose date cannot be parsed drop out of a date-filtered view.
        if value is None:
            return False
        if date_from and value < date_from:
            return False
        if date_to and value > date_to:
            return False
        return True

    def apply(
        self,
        records: Iterable[Record],
        state: FilterState,
        *,
        owner: str | None = None,
    ) -> list[Record]:
        """Return the records visible under ``state``.

        ``owner`` narrows owner-scoped collections to rows whose
        ``created_by`` equals it exactly.
        """
        term = state.search_term.strip()
        result = []
        for record in records:
            if owner is not None and self._profile.owner_scoped and record.created_by != owner:
                continue
            if bool(record.archived) != state.show_archived:
                continue
            if not self.matches_search(record, term):
                continue
            if not self.matches_status(record, state.status):
                continue
            if not self.matches_fields(record, state.field_filters):
                continue
            if not self.matches_date_range(record, state.date_from, state.date_to):
                continue
            result.append(record)
        return result


class Debouncer:
    """Delays a callback until its input stops changing for ``delay`` seconds.

    Usage:
        debouncer = Debouncer(0.3, apply_search)
        debouncer.push("lap")
        debouncer.push("laptop")     # cancels the pending "lap"
        await debouncer.wait()       # apply_search("laptop") has run
    """

    def __init__(self, delay: float, callback: Callable[[str], Awaitable[None] | None]):
        self._delay = delay
        self._callback = callback
        self._task: asyncio.Task | None = None
        self._pending: str | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: str) -> None:
        """Schedule ``value``; any earlier pending value is dropped."""
        self.cancel()
        self._pending = value
        self._task = asyncio.get_running_loop().create_task(self._fire_later(value))

    async def _fire_later(self, value: str) -> None:
        await asyncio.sleep(self._delay)
        self._pending = None
        await self._invoke(value)

    async def _invoke(self, value: str) -> None:
        outcome = self._callback(value)
        if asyncio.iscoroutine(outcome):
            await outcome

    async def flush(self) -> None:
        """Apply the pending value now instead of waiting out the delay."""
        if self._pending is None:
            return
        value = self._pending
        self.cancel()
        await self._invoke(value)

    async def wait(self) -> None:
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                logger.debug("Debounced value superseded before it fired")

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._pending = None
