"""Audit notification interface. Recorder depends on this protocol; sinks are swappable."""

import logging
from typing import Protocol

from app.audit.models import AuditRecord

logger = logging.getLogger(__name__)


class AuditNotifier(Protocol):
    """Post-write notification sink (log, message bus, ...). Called off the caller's path."""

    async def publish(self, record: AuditRecord) -> None:
        ...


class LoggingAuditNotifier:
    """Default AuditNotifier: logs the event only. Used when no message bus is wired."""

    async def publish(self, record: AuditRecord) -> None:
        logger.info(
            "audit_event_published",
            extra={
                "audit_id": record.id,
                "action_type": record.action_type.value,
                "entity_type": record.entity_type,
                "entity_id": record.entity_id,
                "actor_name": record.actor_name,
            },
        )
