"""Unit tests for the SortEngine, value comparison and the header-click cycle."""

from wms.application.services import SortEngine, compare_values
from wms.domain.entities import Record, SortDirection, SortState


def _rec(record_id: str, **data) -> Record:
    return Record(id=record_id, entity_type="inventory", data=data)


def _ids(records: list[Record]) -> list[str]:
    return [r.id for r in records]


def test_no_sort_column_keeps_filter_order():
    records = [_rec("INV-003"), _rec("INV-001"), _rec("INV-002")]
    assert _ids(SortEngine().sort(records, SortState())) == ["INV-003", "INV-001", "INV-002"]


def test_numbers_compare_numerically():
    records = [_rec("A", quantity=100), _rec("B", quantity=9), _rec("C", quantity=25.5)]
    result = SortEngine().sort(records, SortState("quantity", SortDirection.ASC))
    assert _ids(result) == ["B", "C", "A"]


def test_missing_values_sort_last_in_both_directions():
    records = [_rec("A", quantity=5), _rec("B"), _rec("C", quantity=1), _rec("D", quantity=None)]
    engine = SortEngine()

    asc = engine.sort(records, SortState("quantity", SortDirection.ASC))
    desc = engine.sort(records, SortState("quantity", SortDirection.DESC))

    assert _ids(asc) == ["C", "A", "B", "D"]
    assert _ids(desc) == ["A", "C", "B", "D"]


def test_text_is_case_insensitive_and_digit_aware():
    records = [_rec("SO-10"), _rec("so-2"), _rec("SO-1")]
    result = SortEngine().sort(records, SortState("id", SortDirection.ASC))
    assert _ids(result) == ["SO-1", "so-2", "SO-10"]


def test_accents_do_not_change_the_order():
    assert compare_values("Élan", "elan") == 0
    assert compare_values("Zürich", "Zagreb") > 0


def test_sort_is_stable_for_equal_keys():
    records = [_rec("A", status="Low"), _rec("B", status="In"), _rec("C", status="Low")]
    result = SortEngine().sort(records, SortState("status", SortDirection.ASC))
    assert _ids(result) == ["B", "A", "C"]


def test_descending_reverses_the_comparison():
    assert compare_values(1, 2, SortDirection.ASC) < 0
    assert compare_values(1, 2, SortDirection.DESC) > 0
    assert compare_values(None, 2, SortDirection.DESC) > 0


def test_nested_paths_can_be_sorted():
    records = [
        _rec("A", shipping={"city": "Paris"}),
        _rec("B", shipping={"city": "Amsterdam"}),
    ]
    result = SortEngine().sort(records, SortState("shipping.city"))
    assert _ids(result) == ["B", "A"]


def test_header_click_cycles_asc_desc_none():
    state = SortState()

    state.request("name")
    assert (state.column, state.direction) == ("name", SortDirection.ASC)
    state.request("name")
    assert (state.column, state.direction) == ("name", SortDirection.DESC)
    state.request("name")
    assert state.column is None
    assert not state.is_active


def test_clicking_another_column_starts_ascending():
    state = SortState("name", SortDirection.DESC)
    state.request("quantity")
    assert state.column == "quantity"
    assert state.direction == SortDirection.ASC
