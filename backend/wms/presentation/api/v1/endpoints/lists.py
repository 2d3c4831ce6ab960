"""List view endpoints — filtered, sorted, paginated collections and their mutations.

Each request builds a ListManager for the collection, loads it, applies the
query's filters and sort, then reads a page or dispatches a mutation.
"""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from wms.application.schemas.lists import (
    ListBulkRequest,
    ListFiltersSchema,
    ListMutationRequest,
    ListMutationResponse,
    ListPageResponse,
    ListStatisticsSchema,
    NoticeSchema,
    PermissionsSchema,
)
from wms.application.schemas.records import BulkOperationResponse, RecordResponse
from wms.application.services import ListManager, MutationResult, export_filename
from wms.domain.entities import STATUS_ALL, SortDirection
from wms.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    RecordValidationError,
    RemoteServiceError,
)
from wms.infrastructure.dependencies import get_list_manager, get_notifier
from wms.infrastructure.notifications import CollectingNotifier

router = APIRouter(prefix="/lists", tags=["Lists"])

_ERROR_STATUS: list[tuple[type[Exception], int]] = [
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (RecordValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (DuplicateEntityError, status.HTTP_409_CONFLICT),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (RemoteServiceError, status.HTTP_502_BAD_GATEWAY),
]


def list_filters(
    q: str = Query("", description="Case-insensitive search term"),
    status_filter: str = Query("all", alias="status"),
    archived: bool = Query(False, description="Show archived instead of active records"),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    category: str = Query("all", description="Exact category match"),
    subcategory: str = Query("all"),
    sort: str | None = Query(None, description="Field to sort by"),
    direction: Literal["asc", "desc"] | None = Query(None),
) -> ListFiltersSchema:
    return ListFiltersSchema(
        q=q,
        status=status_filter,
        archived=archived,
        date_from=date_from,
        date_to=date_to,
        category=category,
        subcategory=subcategory,
        sort=sort,
        direction=direction,
    )


def _require_read(manager: ListManager) -> None:
    profile = manager.profile
    if not manager.user.can_read(profile.permission_scope, profile.owner_scoped):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(PermissionDeniedError("view", profile.plural_label)),
        )


async def _load(manager: ListManager) -> None:
    result = await manager.load()
    if result.failed:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load {manager.profile.plural_label}",
        )


async def _apply_filters(manager: ListManager, filters: ListFiltersSchema) -> None:
    manager.search_term = filters.q
    await manager.apply_search_now()
    manager.set_status(filters.status)
    manager.set_show_archived(filters.archived)
    manager.set_date_range(filters.date_from, filters.date_to)
    for name in manager.profile.filter_fields:
        manager.set_field_filter(name, getattr(filters, name, STATUS_ALL))
    if filters.sort:
        manager.sort_state.column = filters.sort
        manager.sort_state.direction = SortDirection(filters.direction or "asc")


def _raise_for_result(result: MutationResult) -> None:
    if result.ok:
        return
    detail = result.notice.message if result.notice else "Request failed"
    for exc_type, code in _ERROR_STATUS:
        if isinstance(result.error, exc_type):
            raise HTTPException(status_code=code, detail=detail)
    if result.error is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _mutation_response(
    result: MutationResult, notifier: CollectingNotifier
) -> ListMutationResponse:
    return ListMutationResponse(
        ok=result.ok,
        record=(
            RecordResponse.model_validate(result.record, from_attributes=True)
            if result.record is not None
            else None
        ),
        bulk=BulkOperationResponse.from_result(result.bulk) if result.bulk else None,
        notices=[NoticeSchema.from_notice(n) for n in notifier.notices],
    )


# ── Read ────────────────────────────────────────────────────────────


@router.get("/{entity}", response_model=ListPageResponse)
async def get_list_page(
    page: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1, le=100),
    include_related: bool = Query(False, description="Also return related collections"),
    filters: ListFiltersSchema = Depends(list_filters),
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListPageResponse:
    """One page of a collection with statistics and the caller's permissions."""
    _require_read(manager)
    await _load(manager)
    await _apply_filters(manager, filters)
    if page_size is not None:
        manager.paginator.page_size = page_size

    window = manager.page(page)
    stats = manager.statistics()
    return ListPageResponse(
        entity_type=manager.profile.entity_type,
        label=manager.profile.label,
        items=[RecordResponse.model_validate(r, from_attributes=True) for r in window.items],
        page=window.page,
        page_size=window.page_size,
        total_items=window.total_items,
        total_pages=window.total_pages,
        start_index=window.start_index,
        end_index=window.end_index,
        can_go_next=window.can_go_next,
        can_go_previous=window.can_go_previous,
        filters=filters,
        filters_active=manager.has_active_filters,
        statistics=ListStatisticsSchema(**stats.to_dict()),
        permissions=PermissionsSchema.for_user(manager.user, manager.profile),
        related=(
            {
                name: [RecordResponse.model_validate(r, from_attributes=True) for r in records]
                for name, records in manager.related.items()
            }
            if include_related
            else {}
        ),
        notices=[NoticeSchema.from_notice(n) for n in notifier.notices],
    )


@router.get("/{entity}/export")
async def export_list(
    filters: ListFiltersSchema = Depends(list_filters),
    manager: ListManager = Depends(get_list_manager),
) -> Response:
    """CSV of every row matching the filters (not just one page)."""
    _require_read(manager)
    await _load(manager)
    await _apply_filters(manager, filters)
    filename = export_filename(manager.profile)
    return Response(
        content=manager.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ── Bulk ────────────────────────────────────────────────────────────
# Declared before the single-record routes so "bulk" never matches as a record id.


@router.post("/{entity}/bulk/{action}", response_model=ListMutationResponse)
async def bulk_action(
    action: Literal["archive", "restore", "delete", "update"],
    body: ListBulkRequest,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    """Apply one action to explicit ids or to every row matching ``filters``.

    A partial failure is still a 200 carrying a warning notice and the
    per-id outcome.
    """
    _require_read(manager)
    if not body.select_all_pages and not body.ids:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide ids or set select_all_pages",
        )
    if action == "update" and not body.data:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Bulk update requires data",
        )

    await _load(manager)
    ids: list[str] | None = body.ids
    if body.select_all_pages:
        await _apply_filters(manager, body.filters)
        manager.select_all_pages()
        ids = None

    if action == "archive":
        result = await manager.bulk_archive(ids)
    elif action == "restore":
        result = await manager.bulk_restore(ids)
    elif action == "delete":
        result = await manager.bulk_permanently_delete(ids)
    else:
        result = await manager.bulk_update(body.data or {}, ids)

    _raise_for_result(result)
    return _mutation_response(result, notifier)


# ── Single records ──────────────────────────────────────────────────


@router.post("/{entity}", response_model=ListMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_list_record(
    body: ListMutationRequest,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    """Validate and create a record; validation failures never reach the store."""
    result = await manager.create(body.data)
    _raise_for_result(result)
    return _mutation_response(result, notifier)


@router.put("/{entity}/{record_id}", response_model=ListMutationResponse)
async def update_list_record(
    record_id: str,
    body: ListMutationRequest,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    _require_read(manager)
    await _load(manager)
    result = await manager.update(record_id, body.data)
    _raise_for_result(result)
    return _mutation_response(result, notifier)


@router.post("/{entity}/{record_id}/archive", response_model=ListMutationResponse)
async def archive_list_record(
    record_id: str,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    _require_read(manager)
    await _load(manager)
    result = await manager.archive(record_id)
    _raise_for_result(result)
    return _mutation_response(result, notifier)


@router.post("/{entity}/{record_id}/restore", response_model=ListMutationResponse)
async def restore_list_record(
    record_id: str,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    _require_read(manager)
    await _load(manager)
    result = await manager.restore(record_id)
    _raise_for_result(result)
    return _mutation_response(result, notifier)


@router.delete("/{entity}/{record_id}", response_model=ListMutationResponse)
async def delete_list_record(
    record_id: str,
    manager: ListManager = Depends(get_list_manager),
    notifier: CollectingNotifier = Depends(get_notifier),
) -> ListMutationResponse:
    """Permanently delete a record (Owner/Admin only)."""
    _require_read(manager)
    await _load(manager)
    result = await manager.permanently_delete(record_id)
    _raise_for_result(result)
    return _mutation_response(result, notifier)
