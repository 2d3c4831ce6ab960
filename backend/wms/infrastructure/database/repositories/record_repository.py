"""Concrete RecordService backed by SQLAlchemy — the local record store."""

import re
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wms.application.interfaces import RecordService
from wms.domain.entities import BulkOperationResult, Record, id_prefix_for
from wms.domain.entities.entity_profile import PROFILES
from wms.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from wms.infrastructure.database.models import RecordModel

_NON_DIGITS = re.compile(r"\D")


def _label(entity_type: str) -> str:
    profile = PROFILES.get(entity_type)
    return profile.label if profile else entity_type


class SQLAlchemyRecordService(RecordService):
    """Implements the RecordService port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RecordModel) -> Record:
        """Map ORM model → domain entity."""
        return Record(
            id=model.id,
            entity_type=model.entity_type,
            data=dict(model.data or {}),
            archived=model.archived,
            archived_at=model.archived_at,
            created_by=model.created_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Record) -> RecordModel:
        """Map domain entity → ORM model (for creation)."""
        return RecordModel(
            id=entity.id,
            entity_type=entity.entity_type,
            data=entity.data,
            archived=entity.archived,
            archived_at=entity.archived_at,
            created_by=entity.created_by,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def _get_model(self, entity_type: str, record_id: str) -> RecordModel | None:
        return await self._session.get(RecordModel, (entity_type, record_id))

    async def _require_model(self, entity_type: str, record_id: str) -> RecordModel:
        model = await self._get_model(entity_type, record_id)
        if model is None:
            raise EntityNotFoundError(_label(entity_type), record_id)
        return model

    async def _next_id(self, entity_type: str) -> str:
        """``PREFIX-NNN`` one past the highest number in use."""
        result = await self._session.execute(
            select(RecordModel.id).where(RecordModel.entity_type == entity_type)
        )
        highest = max(
            (int(digits) for digits in (_NON_DIGITS.sub("", i) for i in result.scalars()) if digits),
            default=0,
        )
        return f"{id_prefix_for(entity_type)}-{highest + 1:03d}"

    # ── Single-record operations ─────────────────────────────────────

    async def list_records(self, entity_type: str) -> list[Record]:
        stmt = (
            select(RecordModel)
            .where(RecordModel.entity_type == entity_type)
            .order_by(RecordModel.created_at.desc(), RecordModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def get(self, entity_type: str, record_id: str) -> Record | None:
        model = await self._get_model(entity_type, record_id)
        return self._to_entity(model) if model else None

    async def create(
        self,
        entity_type: str,
        data: dict[str, Any],
        *,
        record_id: str | None = None,
        created_by: str | None = None,
    ) -> Record:
        if record_id is None:
            record_id = await self._next_id(entity_type)
        elif await self._get_model(entity_type, record_id) is not None:
            raise DuplicateEntityError(_label(entity_type), "id", record_id)

        record = Record(
            id=record_id,
            entity_type=entity_type,
            data=dict(data),
            created_by=created_by,
        )
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, entity_type: str, record_id: str, data: dict[str, Any]) -> Record:
        model = await self._require_model(entity_type, record_id)
        record = self._to_entity(model)
        record.update(data)
        model.data = record.data
        model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def _set_archived(self, model: RecordModel, archived: bool) -> None:
        record = self._to_entity(model)
        if archived:
            record.archive()
        else:
            record.restore()
        model.archived = record.archived
        model.archived_at = record.archived_at
        model.updated_at = record.updated_at
        await self._session.flush()

    async def archive(self, entity_type: str, record_id: str) -> Record:
        model = await self._require_model(entity_type, record_id)
        await self._set_archived(model, True)
        return self._to_entity(model)

    async def restore(self, entity_type: str, record_id: str) -> Record:
        model = await self._require_model(entity_type, record_id)
        await self._set_archived(model, False)
        return self._to_entity(model)

    async def permanently_delete(self, entity_type: str, record_id: str) -> None:
        model = await self._require_model(entity_type, record_id)
        await self._session.delete(model)
        await self._session.flush()

    # ── Bulk operations ──────────────────────────────────────────────

    async def _bulk(self, entity_type: str, ids: list[str], apply) -> BulkOperationResult:
        result = BulkOperationResult()
        for record_id in ids:
            model = await self._get_model(entity_type, record_id)
            if model is None:
                result.record_failure(record_id, f"{_label(entity_type)} {record_id} not found")
                continue
            await apply(model)
            result.record_success(record_id)
        return result

    async def bulk_archive(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        async def apply(model: RecordModel) -> None:
            await self._set_archived(model, True)

        return await self._bulk(entity_type, ids, apply)

    async def bulk_restore(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        async def apply(model: RecordModel) -> None:
            await self._set_archived(model, False)

        return await self._bulk(entity_type, ids, apply)

    async def bulk_permanently_delete(self, entity_type: str, ids: list[str]) -> BulkOperationResult:
        async def apply(model: RecordModel) -> None:
            await self._session.delete(model)
            await self._session.flush()

        return await self._bulk(entity_type, ids, apply)

    async def bulk_update(
        self, entity_type: str, ids: list[str], data: dict[str, Any]
    ) -> BulkOperationResult:
        async def apply(model: RecordModel) -> None:
            model.data = {**(model.data or {}), **data}
            model.updated_at = datetime.now(timezone.utc)
            await self._session.flush()

        return await self._bulk(entity_type, ids, apply)
