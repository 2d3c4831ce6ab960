"""Single state-transition function for the locally cached collection."""

from collections.abc import Iterable, Sequence
from dataclasses import replace

from wms.domain.entities import (
    EventKind,
    Record,
    RecordArchived,
    RecordCreated,
    RecordDeleted,
    RecordEvent,
    RecordRestored,
    RecordUpdated,
)


def apply(event: RecordEvent, records: Sequence[Record]) -> list[Record]:
    """Return the cache after ``event``; the input sequence is not modified.

    created  -> prepended (replaces a row with the same id)
    updated  -> replaced in place
    archived -> ``archived`` flag set
    restored -> ``archived`` flag cleared
    deleted  -> removed
    Events for ids the cache does not hold are no-ops, except ``created``.
    """
    if event.kind == EventKind.CREATED:
        assert isinstance(event, RecordCreated)
        return [event.record, *(r for r in records if r.id != event.record.id)]

    if event.kind == EventKind.UPDATED:
        assert isinstance(event, RecordUpdated)
        return [event.record if r.id == event.record.id else r for r in records]

    if event.kind == EventKind.ARCHIVED:
        assert isinstance(event, RecordArchived)
        return [_flagged(r, True) if r.id == event.record_id else r for r in records]

    if event.kind == EventKind.RESTORED:
        assert isinstance(event, RecordRestored)
        return [_flagged(r, False) if r.id == event.record_id else r for r in records]

    if event.kind == EventKind.DELETED:
        assert isinstance(event, RecordDeleted)
        return [r for r in records if r.id != event.record_id]

    raise ValueError(f"Unhandled record event kind: {event.kind}")


def apply_all(events: Iterable[RecordEvent], records: Sequence[Record]) -> list[Record]:
    result = list(records)
    for event in events:
        result = apply(event, result)
    return result


def _flagged(record: Record, archived: bool) -> Record:
    patched = replace(record, archived=archived)
    if archived:
        patched.archive()
    else:
        patched.restore()
    return patched
