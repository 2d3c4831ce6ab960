"""Unit tests for the BatchSelector (page and all-pages selection)."""

from wms.application.services import BatchSelector
from wms.domain.entities import Record, SelectionScope, SelectionState

ALL_IDS = [f"INV-{n:03d}" for n in range(1, 26)]
PAGE_ONE = ALL_IDS[:10]


def test_toggle_adds_and_removes_ids():
    selector = BatchSelector()
    selector.toggle("INV-001")
    assert selector.is_selected("INV-001")
    selector.toggle("INV-001")
    assert not selector.has_selection


def test_page_checkbox_state_none_some_all():
    selector = BatchSelector()
    assert selector.state(PAGE_ONE) == SelectionState.NONE

    selector.toggle("INV-001")
    assert selector.state(PAGE_ONE) == SelectionState.SOME
    assert selector.is_partially_selected(PAGE_ONE)
    assert not selector.is_all_selected(PAGE_ONE)

    selector.select_page(PAGE_ONE)
    assert selector.state(PAGE_ONE) == SelectionState.ALL
    assert selector.is_all_selected(PAGE_ONE)
    assert not selector.is_partially_selected(PAGE_ONE)


def test_toggle_page_selects_exactly_the_page_then_clears_it():
    selector = BatchSelector()
    selector.toggle("INV-020")

    selector.toggle_page(PAGE_ONE)
    assert selector.selected_ids == frozenset(PAGE_ONE)

    selector.toggle_page(PAGE_ONE)
    assert selector.selection_count == 0


def test_select_all_banner_flow():
    selector = BatchSelector()

    selector.toggle_page(PAGE_ONE)
    assert selector.selection_count == 10
    assert selector.show_select_all_banner(PAGE_ONE, total_count=25)

    selector.select_all_pages(ALL_IDS)
    assert selector.selection_count == 25
    assert selector.scope == SelectionScope.ALL_PAGES
    assert selector.is_all_pages_selected(ALL_IDS)
    assert selector.is_all_selected(PAGE_ONE, ALL_IDS)

    selector.deselect_all()
    assert selector.selection_count == 0
    assert selector.scope == SelectionScope.PAGE
    assert not selector.show_select_all_banner(PAGE_ONE, total_count=25)


def test_no_banner_when_the_page_holds_every_row():
    selector = BatchSelector()
    selector.select_page(PAGE_ONE)
    assert not selector.show_select_all_banner(PAGE_ONE, total_count=10)


def test_dropping_a_row_leaves_the_all_pages_scope():
    selector = BatchSelector()
    selector.select_all_pages(ALL_IDS)
    selector.toggle("INV-005")

    assert selector.scope == SelectionScope.PAGE
    assert selector.selection_count == 24
    assert not selector.is_all_pages_selected(ALL_IDS)


def test_all_and_partial_are_mutually_exclusive():
    selector = BatchSelector()
    for ids in ([], ["INV-001"], PAGE_ONE[:5], PAGE_ONE):
        selector.select_page(ids)
        assert not (
            selector.is_all_selected(PAGE_ONE) and selector.is_partially_selected(PAGE_ONE)
        )


def test_selected_records_follow_list_order_and_skip_stale_ids():
    records = [Record(id=i, entity_type="inventory") for i in ("INV-003", "INV-001", "INV-002")]
    selector = BatchSelector()
    selector.toggle("INV-002")
    selector.toggle("INV-003")
    selector.toggle("INV-999")

    assert [r.id for r in selector.selected_records(records)] == ["INV-003", "INV-002"]


def test_discard_removes_ids_without_touching_scope():
    selector = BatchSelector()
    selector.select_all_pages(ALL_IDS)
    selector.discard(["INV-001", "INV-002"])
    assert selector.selection_count == 23
    assert selector.scope == SelectionScope.ALL_PAGES


def test_rows_selected_on_another_page_do_not_mark_this_page():
    selector = BatchSelector()
    selector.toggle("INV-001")
    page_two = ALL_IDS[10:20]

    assert selector.state(page_two) == SelectionState.NONE
    assert not selector.is_partially_selected(page_two)
    assert not selector.is_all_selected(page_two)
