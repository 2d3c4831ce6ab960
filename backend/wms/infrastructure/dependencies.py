"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from wms.application.interfaces import NotificationChannel, RecordService
from wms.application.services import ListManager
from wms.config import get_settings
from wms.domain.entities import CurrentUser, Role, get_profile
from wms.domain.exceptions import UnknownEntityTypeError
from wms.infrastructure.database.repositories import SQLAlchemyRecordService
from wms.infrastructure.database.session import get_db_session
from wms.infrastructure.monitoring import ErrorReporter
from wms.infrastructure.notifications import CollectingNotifier, RecordNotificationChannel
from wms.infrastructure.remote import HttpRecordService

ANONYMOUS_USER_ID = "anonymous"


async def get_current_user(
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    x_user_email: str | None = Header(None, alias="X-User-Email"),
    x_user_role: str | None = Header(None, alias="X-User-Role"),
    x_user_name: str | None = Header(None, alias="X-User-Name"),
) -> CurrentUser:
    """Builds the caller from identity headers set by the upstream auth layer.

    Missing headers yield an anonymous Viewer.
    """
    return CurrentUser(
        id=x_user_id or x_user_email or ANONYMOUS_USER_ID,
        email=x_user_email,
        name=x_user_name,
        role=Role.parse(x_user_role),
    )


async def get_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RecordService, None]:
    """Provides the configured record store: the local database or a remote API."""
    settings = get_settings()
    if settings.record_backend == "http":
        yield HttpRecordService(
            base_url=settings.remote_api_base_url,
            timeout=settings.remote_api_timeout,
        )
        return
    yield SQLAlchemyRecordService(session)


async def get_local_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[RecordService, None]:
    """The database-backed store behind the raw ``/records`` API."""
    yield SQLAlchemyRecordService(session)


def get_notifier() -> CollectingNotifier:
    """A fresh notice collector per request."""
    return CollectingNotifier()


def get_notification_channel(
    service: RecordService = Depends(get_record_service),
) -> NotificationChannel:
    return RecordNotificationChannel(service)


@lru_cache
def get_error_reporter() -> ErrorReporter:
    """Process-wide error log shared by the exception handler and the API."""
    return ErrorReporter(max_entries=100)


def get_list_manager(
    entity: str,
    service: RecordService = Depends(get_record_service),
    user: CurrentUser = Depends(get_current_user),
    notifier: CollectingNotifier = Depends(get_notifier),
    channel: NotificationChannel = Depends(get_notification_channel),
) -> ListManager:
    """Provides a ListManager for the collection named in the path."""
    try:
        profile = get_profile(entity, listable_only=True)
    except UnknownEntityTypeError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    settings = get_settings()
    return ListManager(
        profile,
        service,
        user,
        notifier,
        channel,
        page_size=settings.page_size,
        debounce_seconds=settings.search_debounce_seconds,
    )
