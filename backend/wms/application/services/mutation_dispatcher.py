"""Mutation dispatcher — gated, validated remote mutations that yield cache events.

Every operation returns a MutationResult instead of raising: failures are
caught at the call site and turned into an error notice, so the caller's
cached state is left untouched unless events come back.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from wms.application.interfaces import NotificationChannel, Notifier, RecordService
from wms.application.schemas.entity_inputs import (
    to_record_keys,
    validate_record_changes,
    validate_record_input,
)
from wms.domain.entities import (
    BulkOperationResult,
    CurrentUser,
    EntityProfile,
    Notice,
    Notification,
    Record,
    RecordArchived,
    RecordCreated,
    RecordDeleted,
    RecordEvent,
    RecordRestored,
    RecordUpdated,
    Role,
)
from wms.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    RecordValidationError,
)
from wms.infrastructure.logging.colored_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger("MutationDispatcher")

NOTIFY_ROLES = [Role.OWNER.value, Role.ADMIN.value]


@dataclass
class MutationResult:
    """Outcome of one dispatched mutation.

    ``ok`` is true once the remote call completed (a partial bulk failure is
    still ``ok``); ``events`` only ever describe what the store accepted.
    """

    ok: bool
    events: list[RecordEvent] = field(default_factory=list)
    notice: Notice | None = None
    bulk: BulkOperationResult | None = None
    record: Record | None = None
    error: Exception | None = None


class MutationDispatcher:
    """Issues create / update / archive / restore / delete calls for one collection."""

    def __init__(
        self,
        service: RecordService,
        profile: EntityProfile,
        user: CurrentUser,
        notifier: Notifier | None = None,
        notification_channel: NotificationChannel | None = None,
    ):
        self._service = service
        self._profile = profile
        self._user = user
        self._notifier = notifier
        self._channel = notification_channel

    # ── Single-record operations ─────────────────────────────────────

    async def create(self, data: dict[str, Any]) -> MutationResult:
        profile = self._profile
        if not self._user.can_create(profile.permission_scope, profile.owner_scoped):
            return self._denied("create")

        try:
            fields = validate_record_input(
                profile.entity_type,
                data,
                required_fields=profile.required_fields,
                creating=True,
            )
        except RecordValidationError as exc:
            return self._rejected(exc)

        try:
            with alog.timed_step(ActivityStage.MUTATE, f"Creating {profile.label}"):
                record = await self._service.create(
                    profile.entity_type, fields, created_by=self._user.owner_key
                )
        except Exception as exc:
            return self._failed(exc, f"Failed to create {profile.label.lower()}")

        if profile.notify_on_customer_create and self._user.is_customer:
            await self._notify_elevated_roles(record)

        return self._succeeded(
            f"{profile.label} {record.id} created successfully",
            [RecordCreated(record)],
            record=record,
        )

    async def update(
        self,
        record_id: str,
        data: dict[str, Any],
        *,
        current: Record | None = None,
    ) -> MutationResult:
        """Validate the merged record, then send the normalised fields.

        ``current`` is the cached copy; without it the record is fetched first.
        """
        profile = self._profile
        if not self._user.can_edit(profile.permission_scope):
            return self._denied("edit")

        try:
            if current is None:
                current = await self._service.get(profile.entity_type, record_id)
                if current is None:
                    raise EntityNotFoundError(profile.label, record_id)
        except Exception as exc:
            return self._failed(exc, f"Failed to update {profile.label.lower()}")

        try:
            fields = validate_record_input(
                profile.entity_type,
                {**current.data, **to_record_keys(data)},
                required_fields=profile.required_fields,
                creating=False,
            )
        except RecordValidationError as exc:
            return self._rejected(exc)

        try:
            with alog.timed_step(ActivityStage.MUTATE, f"Updating {profile.label} {record_id}"):
                record = await self._service.update(profile.entity_type, record_id, fields)
        except Exception as exc:
            return self._failed(exc, f"Failed to update {profile.label.lower()}")

        return self._succeeded(
            f"{profile.label} {record_id} updated successfully",
            [RecordUpdated(record)],
            record=record,
        )

    async def archive(self, record: Record) -> MutationResult:
        profile = self._profile
        if not self._user.can_delete(profile.permission_scope):
            return self._denied("archive")
        if record.archived:
            return self._rejected(InvalidTransitionError(profile.label, record.id, "archive"))

        try:
            with alog.timed_step(ActivityStage.MUTATE, f"Archiving {profile.label} {record.id}"):
                archived = await self._service.archive(profile.entity_type, record.id)
        except Exception as exc:
            return self._failed(exc, f"Failed to archive {profile.label.lower()}")

        return self._succeeded(
            f"{profile.label} {record.id} archived successfully",
            [RecordArchived(record.id)],
            record=archived,
        )

    async def restore(self, record: Record) -> MutationResult:
        profile = self._profile
        if not self._user.can_delete(profile.permission_scope):
            return self._denied("restore")
        if not record.archived:
            return self._rejected(InvalidTransitionError(profile.label, record.id, "restore"))

        try:
            with alog.timed_step(ActivityStage.MUTATE, f"Restoring {profile.label} {record.id}"):
                restored = await self._service.restore(profile.entity_type, record.id)
        except Exception as exc:
            return self._failed(exc, f"Failed to restore {profile.label.lower()}")

        return self._succeeded(
            f"{profile.label} {record.id} restored successfully",
            [RecordRestored(record.id)],
            record=restored,
        )

    async def permanently_delete(self, record: Record) -> MutationResult:
        """Hard delete, open to elevated roles only, from either state."""
        profile = self._profile
        if not self._user.can_permanently_delete(profile.permission_scope):
            return self._denied("permanently delete")

        try:
            with alog.timed_step(ActivityStage.MUTATE, f"Deleting {profile.label} {record.id}"):
                await self._service.permanently_delete(profile.entity_type, record.id)
        except Exception as exc:
            return self._failed(exc, f"Failed to delete {profile.label.lower()}")

        return self._succeeded(
            f"{profile.label} {record.id} permanently deleted",
            [RecordDeleted(record.id)],
        )

    # ── Bulk operations ──────────────────────────────────────────────

    async def bulk_archive(self, ids: Sequence[str]) -> MutationResult:
        if not self._user.can_delete(self._profile.permission_scope):
            return self._denied("archive")
        return await self._run_bulk(
            "archived", ids, self._service.bulk_archive, RecordArchived,
        )

    async def bulk_restore(self, ids: Sequence[str]) -> MutationResult:
        if not self._user.can_delete(self._profile.permission_scope):
            return self._denied("restore")
        return await self._run_bulk(
            "restored", ids, self._service.bulk_restore, RecordRestored,
        )

    async def bulk_permanently_delete(self, ids: Sequence[str]) -> MutationResult:
        if not self._user.can_permanently_delete(self._profile.permission_scope):
            return self._denied("permanently delete")
        return await self._run_bulk(
            "deleted", ids, self._service.bulk_permanently_delete, RecordDeleted,
        )

    async def bulk_update(
        self,
        ids: Sequence[str],
        data: dict[str, Any],
        *,
        current: Mapping[str, Record] | None = None,
    ) -> MutationResult:
        """Apply the same field changes (e.g. a status) to every id.

        Each cached target is checked with ``data`` applied before anything is
        sent. Update events are built from ``current`` patched with ``data``;
        ids missing from it produce no event and show up on the next load.
        """
        profile = self._profile
        if not self._user.can_edit(profile.permission_scope):
            return self._denied("edit")
        if not data:
            return self._rejected(RecordValidationError("No fields to update"))

        cached = current or {}
        changes = to_record_keys(data)
        try:
            for record_id in dict.fromkeys(ids):
                record = cached.get(record_id)
                if record is not None:
                    validate_record_changes(profile.entity_type, record.data, changes)
        except RecordValidationError as exc:
            return self._rejected(exc)

        async def call(entity_type: str, batch: list[str]) -> BulkOperationResult:
            return await self._service.bulk_update(entity_type, batch, changes)

        def to_event(record_id: str) -> RecordEvent | None:
            record = cached.get(record_id)
            if record is None:
                return None
            return RecordUpdated(replace(record, data={**record.data, **changes}))

        return await self._run_bulk("updated", ids, call, to_event)

    async def _run_bulk(self, verb, ids, call, to_event) -> MutationResult:
        profile = self._profile
        batch = list(dict.fromkeys(ids))
        if not batch:
            return self._emit(
                MutationResult(ok=False, notice=Notice.info(f"No {profile.plural_label} selected"))
            )

        alog.step_start(ActivityStage.BULK, f"Bulk {verb}: {len(batch)} {profile.plural_label}")
        try:
            result: BulkOperationResult = await call(profile.entity_type, batch)
        except Exception as exc:
            alog.step_error(ActivityStage.BULK, f"Bulk {verb} failed", error=exc)
            return self._emit(
                MutationResult(
                    ok=False,
                    notice=Notice.error(str(exc) or f"Failed to {verb[:-1]} {profile.plural_label}"),
                    error=exc,
                )
            )

        events = [e for e in (to_event(record_id) for record_id in result.succeeded_ids) if e]
        if result.success:
            alog.step_complete(ActivityStage.BULK, f"{result.success_count} {verb}")
            notice = Notice.success(f"{result.success_count} {profile.plural_label} {verb} successfully")
        else:
            alog.step_warning(
                ActivityStage.BULK,
                f"{result.success_count} {verb}, {result.failed_count} failed",
                errors="; ".join(result.errors),
            )
            notice = Notice.warning(f"{result.success_count} {verb}, {result.failed_count} failed")

        return self._emit(MutationResult(ok=True, events=events, notice=notice, bulk=result))

    # ── Side channel ─────────────────────────────────────────────────

    async def _notify_elevated_roles(self, record: Record) -> None:
        if self._channel is None:
            return
        label = self._profile.label
        notification = Notification(
            type="new_order",
            title=f"New {label}",
            message=f"{self._user.display_name} created {label.lower()} {record.id}",
            target_roles=list(NOTIFY_ROLES),
            created_by=self._user.owner_key,
            reference_id=record.id,
        )
        try:
            await self._channel.create_notification(notification)
        except Exception:
            logger.exception("Failed to create notification for %s %s", label, record.id)

    # ── Result helpers ───────────────────────────────────────────────

    def reject_missing(self, record_id: str) -> MutationResult:
        """Result for an action on an id the caller's cache does not hold."""
        exc = EntityNotFoundError(self._profile.label, record_id)
        return self._emit(
            MutationResult(
                ok=False,
                notice=Notice.error(f"{self._profile.label} {record_id} not found"),
                error=exc,
            )
        )

    def _emit(self, result: MutationResult) -> MutationResult:
        if result.notice is not None and self._notifier is not None:
            self._notifier.notify(result.notice)
        return result

    def _succeeded(
        self, message: str, events: list[RecordEvent], record: Record | None = None
    ) -> MutationResult:
        return self._emit(
            MutationResult(ok=True, events=events, notice=Notice.success(message), record=record)
        )

    def _denied(self, action: str) -> MutationResult:
        exc = PermissionDeniedError(action, self._profile.plural_label)
        logger.info("Denied %s on %s for %s", action, self._profile.entity_type, self._user.id)
        return self._emit(MutationResult(ok=False, notice=Notice.error(str(exc)), error=exc))

    def _rejected(self, exc: RecordValidationError | InvalidTransitionError) -> MutationResult:
        message = exc.message if isinstance(exc, RecordValidationError) else str(exc)
        return self._emit(MutationResult(ok=False, notice=Notice.error(message), error=exc))

    def _failed(self, exc: Exception, fallback: str) -> MutationResult:
        return self._emit(
            MutationResult(ok=False, notice=Notice.error(str(exc) or fallback), error=exc)
        )
