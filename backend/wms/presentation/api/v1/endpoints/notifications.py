"""Notification endpoints — side-channel messages for elevated roles."""

from fastapi import APIRouter, Depends, HTTPException, status

from wms.application.interfaces import NotificationChannel
from wms.application.schemas.lists import NotificationResponse
from wms.domain.entities import CurrentUser
from wms.infrastructure.dependencies import get_current_user, get_notification_channel

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    user: CurrentUser = Depends(get_current_user),
    channel: NotificationChannel = Depends(get_notification_channel),
) -> list[NotificationResponse]:
    """Notifications addressed to the caller's role, newest first."""
    if not user.is_elevated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only owners and admins receive notifications",
        )
    notifications = await channel.list_for_role(user.role.value)
    return [NotificationResponse.from_notification(n) for n in notifications]
