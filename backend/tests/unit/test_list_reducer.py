"""Unit tests for the cache transition function."""

from wms.application.services.list_reducer import apply, apply_all
from wms.domain.entities import (
    Record,
    RecordArchived,
    RecordCreated,
    RecordDeleted,
    RecordRestored,
    RecordUpdated,
)


def _cache() -> list[Record]:
    return [
        Record(id="SUP-001", entity_type="suppliers", data={"name": "TechSupply Co."}),
        Record(id="SUP-002", entity_type="suppliers", data={"name": "Office Plus"}, archived=True),
    ]


def test_created_is_prepended():
    cache = _cache()
    new = Record(id="SUP-003", entity_type="suppliers", data={"name": "Furniture World"})
    result = apply(RecordCreated(new), cache)
    assert [r.id for r in result] == ["SUP-003", "SUP-001", "SUP-002"]


def test_created_replaces_an_existing_row_with_the_same_id():
    cache = _cache()
    again = Record(id="SUP-001", entity_type="suppliers", data={"name": "Renamed"})
    result = apply(RecordCreated(again), cache)
    assert [r.id for r in result] == ["SUP-001", "SUP-002"]
    assert result[0].data["name"] == "Renamed"


def test_updated_replaces_in_place():
    cache = _cache()
    changed = Record(id="SUP-002", entity_type="suppliers", data={"name": "Office Plus Ltd"})
    result = apply(RecordUpdated(changed), cache)
    assert [r.id for r in result] == ["SUP-001", "SUP-002"]
    assert result[1].data["name"] == "Office Plus Ltd"


def test_archive_and_restore_flip_the_flag_without_mutating_input():
    cache = _cache()

    archived = apply(RecordArchived("SUP-001"), cache)
    assert archived[0].archived
    assert archived[0].archived_at is not None
    assert not cache[0].archived

    restored = apply(RecordRestored("SUP-001"), archived)
    assert not restored[0].archived
    assert restored[0].archived_at is None


def test_deleted_removes_the_row():
    result = apply(RecordDeleted("SUP-001"), _cache())
    assert [r.id for r in result] == ["SUP-002"]


def test_unknown_ids_are_no_ops():
    cache = _cache()
    assert [r.id for r in apply(RecordDeleted("SUP-999"), cache)] == ["SUP-001", "SUP-002"]
    assert apply(RecordArchived("SUP-999"), cache) == cache


def test_apply_all_folds_events_in_order():
    events = [
        RecordArchived("SUP-001"),
        RecordDeleted("SUP-002"),
        RecordCreated(Record(id="SUP-003", entity_type="suppliers")),
    ]
    result = apply_all(events, _cache())
    assert [(r.id, r.archived) for r in result] == [("SUP-003", False), ("SUP-001", True)]
