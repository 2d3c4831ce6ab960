"""Abstract remote data service interface (port) for warehouse collections."""

from abc import ABC, abstractmethod
from typing import Any

from wms.domain.entities import BulkOperationResult, Record


class RecordService(ABC):
    """Port for the remote collection store — implemented in the infrastructure layer.

    Single-record calls raise ``EntityNotFoundError`` for unknown ids. Bulk
    calls never raise for individual ids; they report per-id outcomes in a
    ``BulkOperationResult``.
    """

    @abstractmethod
    async def list_records(self, entity_type: str) -> list[Record]:
        """Fetch the whole collection, archived records included."""
        ...

    @abstractmethod
    async def get(self, entity_type: str, record_id: str) -> Record | None:
        ...

    @abstractmethod
    async def create(
        self,
        entity_type: str,
        data: dict[str, Any],
        *,
        record_id: str | None = None,
        created_by: str | None = None,
    ) -> Record:
        """Persist a new record. A missing ``record_id`` is generated (e.g. ``SO-004``)."""
        ...

    @abstractmethod
    async def update(self, entity_type: str, record_id: str, data: dict[str, Any]) -> Record:
        """Merge ``data`` into the stored fields and return the updated record."""
        ...

    @abstractmethod
    async def archive(self, entity_type: str, record_id: str) -> Record:
        ...

    @abstractmethod
    async def restore(self, entity_type: str, record_id: str) -> Record:
        ...

    @abstractmethod
    async def permanently_delete(self, entity_type: str, record_id: str) -> None:
        ...

    @abstractmethod
    async def bulk_archive(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def bulk_restore(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def bulk_permanently_delete(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        ...

    @abstractmethod
    async def bulk_update(
        self, entity_type: str, ids: list[str], data: dict[str, Any]
    ) -> BulkOperationResult:
        """Apply the same field changes to every id."""
        ...
