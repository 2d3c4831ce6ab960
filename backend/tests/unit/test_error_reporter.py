"""Unit tests for the in-memory ErrorReporter and the CollectingNotifier."""

import logging

from wms.domain.entities import Notice
from wms.infrastructure.monitoring import ErrorReporter
from wms.infrastructure.notifications import CollectingNotifier


def _raise_and_report(reporter: ErrorReporter, message: str):
    try:
        raise ValueError(message)
    except ValueError as exc:
        return reporter.report(exc, {"path": "/api/v1/lists/inventory"})


def test_report_captures_type_message_context_and_stack():
    reporter = ErrorReporter()

    entry = _raise_and_report(reporter, "bad value")

    assert entry.error_type == "ValueError"
    assert entry.message == "bad value"
    assert entry.context == {"path": "/api/v1/lists/inventory"}
    assert "Traceback" in entry.stack
    assert len(reporter) == 1


def test_recent_is_newest_first_and_bounded():
    reporter = ErrorReporter(max_entries=3)
    for n in range(5):
        _raise_and_report(reporter, f"error {n}")

    assert [r.message for r in reporter.recent()] == ["error 4", "error 3", "error 2"]

    reporter.clear()
    assert reporter.recent() == []


def test_collecting_notifier_keeps_and_logs_notices(caplog):
    notifier = CollectingNotifier()

    with caplog.at_level(logging.INFO):
        notifier.notify(Notice.success("Supplier SUP-006 created successfully"))
        notifier.notify(Notice.warning("3 deleted, 2 failed"))

    assert [n.message for n in notifier.notices] == [
        "Supplier SUP-006 created successfully",
        "3 deleted, 2 failed",
    ]
    assert any(r.levelno == logging.WARNING for r in caplog.records)

    notifier.clear()
    assert notifier.notices == []
