"""Batch selector — row selection across the current page or all filtered pages."""

from collections.abc import Iterable, Sequence

from wms.domain.entities import Record, SelectionScope, SelectionState


class BatchSelector:
    """Tracks selected record ids and whether the selection spans all pages.

    Queries take the ids of the current page (and, for the all-pages scope,
    the ids of the full filtered list) because both change as the user
    filters and pages; the selector itself only stores ids.
    """

    def __init__(self) -> None:
        self._selected: set[str] = set()
        self.scope = SelectionScope.PAGE

    @property
    def selected_ids(self) -> frozenset[str]:
        return frozenset(self._selected)

    @property
    def selection_count(self) -> int:
        return len(self._selected)

    @property
    def has_selection(self) -> bool:
        return bool(self._selected)

    def is_selected(self, record_id: str) -> bool:
        return record_id in self._selected

    # ── Mutations ────────────────────────────────────────────────────

    def toggle(self, record_id: str) -> None:
        if record_id in self._selected:
            self._selected.discard(record_id)
            # The all-pages selection no longer holds once a row is dropped.
            self.scope = SelectionScope.PAGE
        else:
            self._selected.add(record_id)

    def select_page(self, page_ids: Iterable[str]) -> None:
        self._selected = set(page_ids)
        self.scope = SelectionScope.PAGE

    def toggle_page(self, page_ids: Sequence[str]) -> None:
        """Header checkbox: clear a fully selected page, otherwise select exactly the page."""
        if page_ids and self._selected == set(page_ids):
            self.deselect_all()
        else:
            self.select_page(page_ids)

    def select_all_pages(self, all_ids: Iterable[str]) -> None:
        self._selected = set(all_ids)
        self.scope = SelectionScope.ALL_PAGES

    def deselect_all(self) -> None:
        self._selected.clear()
        self.scope = SelectionScope.PAGE

    def discard(self, record_ids: Iterable[str]) -> None:
        self._selected.difference_update(record_ids)

    # ── Queries ──────────────────────────────────────────────────────

    def scope_ids(self, page_ids: Sequence[str], all_ids: Sequence[str] | None = None) -> list[str]:
        if self.scope == SelectionScope.ALL_PAGES and all_ids is not None:
            return list(all_ids)
        return list(page_ids)

    def _selected_in(
        self, page_ids: Sequence[str], all_ids: Sequence[str] | None
    ) -> tuple[int, int]:
        scope = set(self.scope_ids(page_ids, all_ids))
        return len(self._selected & scope), len(scope)

    def is_all_selected(self, page_ids: Sequence[str], all_ids: Sequence[str] | None = None) -> bool:
        selected, total = self._selected_in(page_ids, all_ids)
        return total > 0 and selected == total

    def is_partially_selected(
        self, page_ids: Sequence[str], all_ids: Sequence[str] | None = None
    ) -> bool:
        selected, total = self._selected_in(page_ids, all_ids)
        return 0 < selected < total

    def is_all_pages_selected(self, all_ids: Sequence[str]) -> bool:
        return (
            self.scope == SelectionScope.ALL_PAGES
            and bool(all_ids)
            and self._selected == set(all_ids)
        )

    def state(self, page_ids: Sequence[str]) -> SelectionState:
        """Checkbox state of the current page: none, some (indeterminate) or all."""
        on_page = self._selected.intersection(page_ids)
        if not on_page:
            return SelectionState.NONE
        if len(on_page) == len(page_ids):
            return SelectionState.ALL
        return SelectionState.SOME

    def show_select_all_banner(self, page_ids: Sequence[str], total_count: int) -> bool:
        """Offer "select all N" once the whole page is selected and more rows exist."""
        if self.scope == SelectionScope.ALL_PAGES:
            return self.has_selection
        return (
            bool(page_ids)
            and self._selected == set(page_ids)
            and total_count > len(page_ids)
        )

    def selected_records(self, records: Iterable[Record]) -> list[Record]:
        """Records behind the selection, in list order; stale ids are ignored."""
        return [record for record in records if record.id in self._selected]
