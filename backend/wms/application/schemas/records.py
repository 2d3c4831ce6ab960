"""Pydantic DTOs (Data Transfer Objects) for the raw record store API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from wms.domain.entities import BulkOperationResult


class RecordCreate(BaseModel):
    """Schema for creating a record in a collection."""

    id: str | None = Field(None, max_length=64, examples=["INV-009"])
    data: dict[str, Any] = Field(
        ..., examples=[{"name": "Laptop Computer", "quantity": 145, "status": "In Stock"}],
    )
    created_by: str | None = Field(None, max_length=255)


class RecordUpdate(BaseModel):
    """Schema for updating a record — changed fields only."""

    data: dict[str, Any]


class RecordResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    entity_type: str
    data: dict[str, Any]
    archived: bool
    archived_at: datetime | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BulkIdsRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)


class BulkUpdateRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1)
    data: dict[str, Any] = Field(..., examples=[{"status": "Inactive"}])


class BulkOperationResponse(BaseModel):
    success: bool
    success_count: int
    failed_count: int
    succeeded_ids: list[str]
    failed_ids: list[str]
    errors: list[str]

    @classmethod
    def from_result(cls, result: BulkOperationResult) -> "BulkOperationResponse":
        return cls(
            success=result.success,
            success_count=result.success_count,
            failed_count=result.failed_count,
            succeeded_ids=list(result.succeeded_ids),
            failed_ids=list(result.failed_ids),
            errors=list(result.errors),
        )

    def to_result(self) -> BulkOperationResult:
        return BulkOperationResult(
            succeeded_ids=list(self.succeeded_ids),
            failed_ids=list(self.failed_ids),
            errors=list(self.errors),
        )
