"""Monitoring endpoints — recent unhandled errors."""

from fastapi import APIRouter, Depends, HTTPException, status

from wms.application.schemas.lists import ErrorReportResponse
from wms.domain.entities import CurrentUser
from wms.infrastructure.dependencies import get_current_user, get_error_reporter
from wms.infrastructure.monitoring import ErrorReporter

router = APIRouter(prefix="/monitoring", tags=["Monitoring"])


@router.get("/errors", response_model=list[ErrorReportResponse])
async def recent_errors(
    user: CurrentUser = Depends(get_current_user),
    reporter: ErrorReporter = Depends(get_error_reporter),
) -> list[ErrorReportResponse]:
    if not user.is_elevated:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed")
    return [ErrorReportResponse.model_validate(r) for r in reporter.recent()]
