"""Summary returned by every bulk operation of the record service."""

from dataclasses import dataclass, field


@dataclass
class BulkOperationResult:
    """Per-id outcome of a bulk call.

    Partial failure is data, not an exception: callers branch on ``success``
    and keep the succeeded subset.
    """

    succeeded_ids: list[str] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded_ids)

    @property
    def failed_count(self) -> int:
        return len(self.failed_ids)

    @property
    def success(self) -> bool:
        return self.failed_count == 0

    def record_success(self, record_id: str) -> None:
        self.succeeded_ids.append(record_id)

    def record_failure(self, record_id: str, error: str) -> None:
        self.failed_ids.append(record_id)
        self.errors.append(error)
