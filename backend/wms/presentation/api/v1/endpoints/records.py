"""Raw record store endpoints — the collection API remote clients talk to."""

from fastapi import APIRouter, Depends, HTTPException, status

from wms.application.interfaces import RecordService
from wms.application.schemas.records import (
    BulkIdsRequest,
    BulkOperationResponse,
    BulkUpdateRequest,
    RecordCreate,
    RecordResponse,
    RecordUpdate,
)
from wms.domain.entities import get_profile
from wms.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    UnknownEntityTypeError,
)
from wms.infrastructure.dependencies import get_local_record_service

router = APIRouter(prefix="/records", tags=["Records"])


def _check_entity(entity: str) -> None:
    try:
        get_profile(entity)
    except UnknownEntityTypeError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Bulk ────────────────────────────────────────────────────────────
# Declared before the single-record routes so "bulk" never matches as a record id.


@router.post("/{entity}/bulk/archive", response_model=BulkOperationResponse)
async def bulk_archive(
    entity: str,
    body: BulkIdsRequest,
    service: RecordService = Depends(get_local_record_service),
) -> BulkOperationResponse:
    _check_entity(entity)
    return BulkOperationResponse.from_result(await service.bulk_archive(entity, body.ids))


@router.post("/{entity}/bulk/restore", response_model=BulkOperationResponse)
async def bulk_restore(
    entity: str,
    body: BulkIdsRequest,
    service: RecordService = Depends(get_local_record_service),
) -> BulkOperationResponse:
    _check_entity(entity)
    return BulkOperationResponse.from_result(await service.bulk_restore(entity, body.ids))


@router.post("/{entity}/bulk/delete", response_model=BulkOperationResponse)
async def bulk_delete(
    entity: str,
    body: BulkIdsRequest,
    service: RecordService = Depends(get_local_record_service),
) -> BulkOperationResponse:
    _check_entity(entity)
    return BulkOperationResponse.from_result(
        await service.bulk_permanently_delete(entity, body.ids)
    )


@router.post("/{entity}/bulk/update", response_model=BulkOperationResponse)
async def bulk_update(
    entity: str,
    body: BulkUpdateRequest,
    service: RecordService = Depends(get_local_record_service),
) -> BulkOperationResponse:
    _check_entity(entity)
    return BulkOperationResponse.from_result(
        await service.bulk_update(entity, body.ids, body.data)
    )


# ── Single records ──────────────────────────────────────────────────


@router.get("/{entity}", response_model=list[RecordResponse])
async def list_records(
    entity: str,
    service: RecordService = Depends(get_local_record_service),
) -> list[RecordResponse]:
    """Retrieve every record of a collection, archived ones included."""
    _check_entity(entity)
    records = await service.list_records(entity)
    return [RecordResponse.model_validate(r, from_attributes=True) for r in records]


@router.get("/{entity}/{record_id}", response_model=RecordResponse)
async def get_record(
    entity: str,
    record_id: str,
    service: RecordService = Depends(get_local_record_service),
) -> RecordResponse:
    _check_entity(entity)
    record = await service.get(entity, record_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(EntityNotFoundError(get_profile(entity).label, record_id)),
        )
    return RecordResponse.model_validate(record, from_attributes=True)


@router.post("/{entity}", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def create_record(
    entity: str,
    data: RecordCreate,
    service: RecordService = Depends(get_local_record_service),
) -> RecordResponse:
    """Create a record; a missing id is generated from the collection prefix."""
    _check_entity(entity)
    try:
        record = await service.create(
            entity, data.data, record_id=data.id, created_by=data.created_by
        )
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return RecordResponse.model_validate(record, from_attributes=True)


@router.put("/{entity}/{record_id}", response_model=RecordResponse)
async def update_record(
    entity: str,
    record_id: str,
    data: RecordUpdate,
    service: RecordService = Depends(get_local_record_service),
) -> RecordResponse:
    _check_entity(entity)
    try:
        record = await service.update(entity, record_id, data.data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RecordResponse.model_validate(record, from_attributes=True)


@router.delete("/{entity}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    entity: str,
    record_id: str,
    service: RecordService = Depends(get_local_record_service),
) -> None:
    """Permanently delete a record."""
    _check_entity(entity)
    try:
        await service.permanently_delete(entity, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/{entity}/{record_id}/archive", response_model=RecordResponse)
async def archive_record(
    entity: str,
    record_id: str,
    service: RecordService = Depends(get_local_record_service),
) -> RecordResponse:
    _check_entity(entity)
    try:
        record = await service.archive(entity, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RecordResponse.model_validate(record, from_attributes=True)


@router.post("/{entity}/{record_id}/restore", response_model=RecordResponse)
async def restore_record(
    entity: str,
    record_id: str,
    service: RecordService = Depends(get_local_record_service),
) -> RecordResponse:
    _check_entity(entity)
    try:
        record = await service.restore(entity, record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return RecordResponse.model_validate(record, from_attributes=True)
