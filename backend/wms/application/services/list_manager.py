"""List manager — one list view of one collection, composed from the list core.

Owns the cached records plus the filter, sort, page and selection state,
and routes every mutation through the dispatcher and the cache reducer.
"""

import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

from wms.application.interfaces import NotificationChannel, Notifier, RecordService
from wms.application.services.list_reducer import apply_all
from wms.application.services.batch_selector import BatchSelector
from wms.application.services.csv_export import export_csv
from wms.application.services.data_loader import DataLoader, LoadResult, LoadSource
from wms.application.services.filter_engine import Debouncer, FilterEngine
from wms.application.services.list_statistics import ListStatistics, compute_statistics
from wms.application.services.mutation_dispatcher import MutationDispatcher, MutationResult
from wms.application.services.paginator import PageWindow, Paginator
from wms.application.services.sort_engine import SortEngine
from wms.domain.entities import (
    CurrentUser,
    EntityProfile,
    EventKind,
    FilterState,
    Record,
    SelectionState,
    SortState,
)
from wms.infrastructure.logging.colored_logger import ActivityLogger, ActivityStage

logger = logging.getLogger("ListManager")
alog = ActivityLogger("ListManager")


class ListManager:
    """Generic list view state for any collection described by an EntityProfile.

    Filter and sort state persist across ``load()`` calls; the selection
    does not.
    """

    def __init__(
        self,
        profile: EntityProfile,
        service: RecordService,
        user: CurrentUser,
        notifier: Notifier | None = None,
        notification_channel: NotificationChannel | None = None,
        *,
        page_size: int = 10,
        debounce_seconds: float = 0.3,
    ):
        self.profile = profile
        self.user = user
        self._service = service

        self.filter_state = FilterState()
        self.sort_state = SortState()
        self.search_term = ""
        self.paginator = Paginator(page_size)
        self.selector = BatchSelector()

        self._filter_engine = FilterEngine(profile)
        self._sort_engine = SortEngine()
        self._debouncer = Debouncer(debounce_seconds, self._apply_search)
        self.dispatcher = MutationDispatcher(
            service, profile, user, notifier, notification_channel
        )
        self._loader = DataLoader(
            primary=LoadSource(profile.entity_type, self._fetch(profile.entity_type)),
            secondaries=[LoadSource(name, self._fetch(name)) for name in profile.secondary_sources],
            notifier=notifier,
            label=profile.plural_label,
        )

        self._records: list[Record] = []
        self.related: dict[str, list[Record]] = {}

    def _fetch(self, entity_type: str):
        async def fetch() -> list[Record]:
            return await self._service.list_records(entity_type)

        return fetch

    # ── Loading ──────────────────────────────────────────────────────

    @property
    def is_loading(self) -> bool:
        return self._loader.is_loading

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    async def load(self) -> LoadResult:
        self.selector.deselect_all()
        result = await self._loader.load()
        self._records = list(result.primary.data)
        self.related = {name: list(o.data) for name, o in result.secondaries.items()}
        logger.debug("%s: %d records cached", self.profile.entity_type, len(self._records))
        alog.stats(records=len(self._records), related=len(self.related))
        return result

    def find(self, record_id: str) -> Record | None:
        return next((r for r in self._records if r.id == record_id), None)

    # ── Filters and sort ─────────────────────────────────────────────

    def set_search_term(self, term: str) -> None:
        """Record the raw term now; the filter sees it once typing pauses."""
        self.search_term = term
        self._debouncer.push(term)

    async def apply_search_now(self) -> None:
        self._debouncer.cancel()
        await self._apply_search(self.search_term)

    async def wait_for_search(self) -> None:
        await self._debouncer.wait()

    async def _apply_search(self, term: str) -> None:
        if term != self.filter_state.search_term:
            self.filter_state.search_term = term
            self.paginator.reset()

    def set_status(self, status: str) -> None:
        self.filter_state.status = status
        self.paginator.reset()

    def set_show_archived(self, show_archived: bool) -> None:
        if show_archived != self.filter_state.show_archived:
            self.filter_state.show_archived = show_archived
            self.selector.deselect_all()
            self.paginator.reset()

    def set_date_range(self, date_from: date | None, date_to: date | None) -> None:
        self.filter_state.date_from = date_from
        self.filter_state.date_to = date_to
        self.paginator.reset()

    def set_field_filter(self, name: str, value: str) -> None:
        """Exact-match filter on one of the profile's ``filter_fields``."""
        if name not in self.profile.filter_fields:
            raise ValueError(f"{self.profile.plural_label} cannot be filtered by {name}")
        self.filter_state.field_filters[name] = value
        self.paginator.reset()

    @property
    def has_active_filters(self) -> bool:
        return self.filter_state.is_active

    def clear_filters(self) -> None:
        self._debouncer.cancel()
        self.search_term = ""
        self.filter_state.clear()
        self.paginator.reset()

    def request_sort(self, column: str) -> SortState:
        self.sort_state.request(column)
        return self.sort_state

    @property
    def owner(self) -> str | None:
        """Ownership filter applied for customers on owner-scoped collections."""
        if self.user.is_customer and self.profile.owner_scoped:
            return self.user.owner_key
        return None

    @property
    def visible_records(self) -> list[Record]:
        """Records the user may see at all, before any view filter."""
        owner = self.owner
        if owner is None:
            return list(self._records)
        return [r for r in self._records if r.created_by == owner]

    @property
    def filtered(self) -> list[Record]:
        return self._filter_engine.apply(self._records, self.filter_state, owner=self.owner)

    @property
    def sorted(self) -> list[Record]:
        return self._sort_engine.sort(self.filtered, self.sort_state)

    # ── Paging ───────────────────────────────────────────────────────

    def page(self, page: int | None = None) -> PageWindow[Record]:
        return self.paginator.window(self.sorted, page)

    def _navigate(self, move) -> PageWindow[Record]:
        self.paginator.window(self.sorted)
        move()
        return self.page()

    def next_page(self) -> PageWindow[Record]:
        return self._navigate(self.paginator.next)

    def previous_page(self) -> PageWindow[Record]:
        return self._navigate(self.paginator.previous)

    def first_page(self) -> PageWindow[Record]:
        return self._navigate(self.paginator.first)

    def last_page(self) -> PageWindow[Record]:
        return self._navigate(self.paginator.last)

    def page_ids(self) -> list[str]:
        return [r.id for r in self.page().items]

    def all_ids(self) -> list[str]:
        return [r.id for r in self.sorted]

    # ── Selection ────────────────────────────────────────────────────

    def toggle_selection(self, record_id: str) -> None:
        self.selector.toggle(record_id)

    def toggle_page_selection(self) -> None:
        self.selector.toggle_page(self.page_ids())

    def select_all_pages(self) -> None:
        self.selector.select_all_pages(self.all_ids())

    def deselect_all(self) -> None:
        self.selector.deselect_all()

    def selection_state(self) -> SelectionState:
        return self.selector.state(self.page_ids())

    def is_all_selected(self) -> bool:
        """Every row in the selection scope (page, or all pages) is selected."""
        return self.selector.is_all_selected(self.page_ids(), self.all_ids())

    def is_partially_selected(self) -> bool:
        return self.selector.is_partially_selected(self.page_ids(), self.all_ids())

    def is_all_pages_selected(self) -> bool:
        return self.selector.is_all_pages_selected(self.all_ids())

    def show_select_all_banner(self) -> bool:
        return self.selector.show_select_all_banner(self.page_ids(), len(self.filtered))

    def selected_records(self) -> list[Record]:
        return self.selector.selected_records(self.sorted)

    # ── Derived views ────────────────────────────────────────────────

    def statistics(self) -> ListStatistics:
        return compute_statistics(self.profile, self.visible_records)

    def export_csv(self) -> str:
        rows = self.sorted
        with alog.timed_step(ActivityStage.EXPORT, f"Exporting {len(rows)} {self.profile.plural_label}"):
            return export_csv(self.profile, rows)

    # ── Mutations ────────────────────────────────────────────────────

    async def create(self, data: dict[str, Any]) -> MutationResult:
        return self._commit(await self.dispatcher.create(data))

    async def update(self, record_id: str, data: dict[str, Any]) -> MutationResult:
        current = self.find(record_id)
        if current is None:
            return self.dispatcher.reject_missing(record_id)
        return self._commit(await self.dispatcher.update(record_id, data, current=current))

    async def archive(self, record_id: str) -> MutationResult:
        record = self.find(record_id)
        if record is None:
            return self.dispatcher.reject_missing(record_id)
        return self._commit(await self.dispatcher.archive(record))

    async def restore(self, record_id: str) -> MutationResult:
        record = self.find(record_id)
        if record is None:
            return self.dispatcher.reject_missing(record_id)
        return self._commit(await self.dispatcher.restore(record))

    async def permanently_delete(self, record_id: str) -> MutationResult:
        record = self.find(record_id)
        if record is None:
            return self.dispatcher.reject_missing(record_id)
        return self._commit(await self.dispatcher.permanently_delete(record))

    async def bulk_archive(self, ids: Sequence[str] | None = None) -> MutationResult:
        return self._commit_bulk(await self.dispatcher.bulk_archive(self._bulk_ids(ids)))

    async def bulk_restore(self, ids: Sequence[str] | None = None) -> MutationResult:
        return self._commit_bulk(await self.dispatcher.bulk_restore(self._bulk_ids(ids)))

    async def bulk_permanently_delete(self, ids: Sequence[str] | None = None) -> MutationResult:
        return self._commit_bulk(
            await self.dispatcher.bulk_permanently_delete(self._bulk_ids(ids))
        )

    async def bulk_update(
        self, data: dict[str, Any], ids: Sequence[str] | None = None
    ) -> MutationResult:
        current = {r.id: r for r in self._records}
        return self._commit_bulk(
            await self.dispatcher.bulk_update(self._bulk_ids(ids), data, current=current)
        )

    def _bulk_ids(self, ids: Sequence[str] | None) -> list[str]:
        """Explicit ids, or the current selection in list order."""
        if ids is not None:
            return list(ids)
        return [r.id for r in self.selected_records()]

    def _commit(self, result: MutationResult) -> MutationResult:
        if result.events:
            self._records = apply_all(result.events, self._records)
            # Rows that left the current view no longer count as selected.
            self.selector.discard(
                e.record_id for e in result.events
                if e.kind in (EventKind.ARCHIVED, EventKind.RESTORED, EventKind.DELETED)
            )
            self.paginator.window(self.sorted)
        return result

    def _commit_bulk(self, result: MutationResult) -> MutationResult:
        self._commit(result)
        if result.ok:
            self.selector.deselect_all()
        return result
