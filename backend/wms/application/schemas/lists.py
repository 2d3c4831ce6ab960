"""Pydantic DTOs for list views (filtered, sorted, paginated collections)."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from wms.application.schemas.records import BulkOperationResponse, RecordResponse
from wms.domain.entities import CurrentUser, EntityProfile, Notice, Notification


class NoticeSchema(BaseModel):
    level: str
    message: str

    @classmethod
    def from_notice(cls, notice: Notice) -> "NoticeSchema":
        return cls(level=notice.level.value, message=notice.message)


class PermissionsSchema(BaseModel):
    """What the caller may do in this list; drives which actions are offered."""

    can_create: bool
    can_edit: bool
    can_delete: bool
    can_permanently_delete: bool

    @classmethod
    def for_user(cls, user: CurrentUser, profile: EntityProfile) -> "PermissionsSchema":
        scope = profile.permission_scope
        return cls(
            can_create=user.can_create(scope, profile.owner_scoped),
            can_edit=user.can_edit(scope),
            can_delete=user.can_delete(scope),
            can_permanently_delete=user.can_permanently_delete(scope),
        )


class ListStatisticsSchema(BaseModel):
    total: int
    archived: int
    by_status: dict[str, int]
    sums: dict[str, float]
    new_this_week: int


class ListFiltersSchema(BaseModel):
    q: str = ""
    status: str = "all"
    archived: bool = False
    date_from: date | None = None
    date_to: date | None = None
    category: str = "all"
    subcategory: str = "all"
    sort: str | None = None
    direction: str | None = None


class ListPageResponse(BaseModel):
    entity_type: str
    label: str
    items: list[RecordResponse]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int
    can_go_next: bool
    can_go_previous: bool
    filters: ListFiltersSchema
    filters_active: bool = False
    statistics: ListStatisticsSchema
    permissions: PermissionsSchema
    related: dict[str, list[RecordResponse]] = Field(default_factory=dict)
    notices: list[NoticeSchema] = Field(default_factory=list)


class ListMutationRequest(BaseModel):
    data: dict[str, Any] = Field(
        ...,
        examples=[{
            "name": "Laptop Computer",
            "category": "Electronics",
            "brand": "Dell",
            "location": "A-12",
            "pricePerPiece": 899.99,
            "supplierId": "SUP-001",
            "quantity": 145,
        }],
    )


class ListBulkRequest(BaseModel):
    """Target either explicit ``ids`` or every row matching the filters."""

    ids: list[str] | None = None
    select_all_pages: bool = False
    filters: ListFiltersSchema = Field(default_factory=ListFiltersSchema)
    data: dict[str, Any] | None = Field(None, examples=[{"status": "Inactive"}])


class ListMutationResponse(BaseModel):
    ok: bool
    record: RecordResponse | None = None
    bulk: BulkOperationResponse | None = None
    notices: list[NoticeSchema] = Field(default_factory=list)


class NotificationResponse(BaseModel):
    id: str | None
    type: str
    title: str
    message: str
    target_roles: list[str]
    created_by: str | None
    reference_id: str | None
    read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            target_roles=list(notification.target_roles),
            created_by=notification.created_by,
            reference_id=notification.reference_id,
            read=notification.read,
            created_at=notification.created_at,
        )


class ErrorReportResponse(BaseModel):
    id: str
    error_type: str
    message: str
    context: dict[str, Any]
    occurred_at: datetime

    model_config = {"from_attributes": True}
