"""Audit recorder: turns a committed domain mutation into a persisted AuditRecord. No FastAPI."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Set

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.notifier import AuditNotifier
from app.audit.payload import build_payload
from app.audit.repository import AuditRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditRecorder:
    """
    Sole writer of audit records.
    Write path: build payload (never fails) -> persist (failure raises AuditError) -> schedule notification.
    Notification runs as a background task; its failure is logged and never reaches the caller.
    """

    def __init__(
        self,
        repository: AuditRepository,
        notifier: AuditNotifier,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending_notifications(self) -> int:
        return len(self._pending)

    async def record(
        self,
        action_type: ActionType,
        entity_type: str,
        entity_id: Any,
        actor_name: str,
        snapshot: Any = None,
    ) -> AuditRecord:
        """Persist one audit record for a mutation that already succeeded. Returns it with its store id."""
        if not entity_type or not entity_type.strip():
            raise ValueError("entity_type must not be empty")

        now = self._clock()
        record = AuditRecord(
            action_type=ActionType(action_type),
            entity_type=entity_type,
            entity_id=str(entity_id),
            actor_name=actor_name,
            timestamp=now,
            payload=build_payload(snapshot, now),
        )

        try:
            saved = await self._repository.save(record)
        except Exception as e:
            self._logger.error(
                "audit_write_failed",
                extra={
                    "action_type": record.action_type.value,
                    "entity_type": entity_type,
                    "entity_id": record.entity_id,
                    "actor_name": actor_name,
                    "error": str(e),
                },
            )
            raise AuditError(f"Failed to create audit log: {e}") from e

        self._logger.info(
            "audit_recorded",
            extra={
                "audit_id": saved.id,
                "action_type": saved.action_type.value,
                "entity_type": saved.entity_type,
                "entity_id": saved.entity_id,
                "actor_name": saved.actor_name,
            },
        )
        self._dispatch_notification(saved)
        return saved

    def _dispatch_notification(self, record: AuditRecord) -> None:
        # Strong reference until done, otherwise the loop may drop the task.
        task = asyncio.create_task(self._notify(record))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _notify(self, record: AuditRecord) -> None:
        try:
            await self._notifier.publish(record)
        except Exception as e:
            self._logger.error(
                "audit_notification_failed",
                extra={"audit_id": record.id, "error": str(e)},
            )

    async def wait_for_pending(self) -> None:
        """Wait for in-flight notifications (shutdown, tests). Never raises notification errors."""
        if self._pending:
            await asyncio.gather(*list(self._pending))
