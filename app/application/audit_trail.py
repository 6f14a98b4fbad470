"""Post-commit audit hook shared by the domain services."""

import logging
from typing import Any, Optional

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.recorder import AuditRecorder


async def audit_after_commit(
    recorder: AuditRecorder,
    logger: logging.Logger,
    action_type: ActionType,
    entity_type: str,
    entity_id: Any,
    actor_name: str,
    snapshot: Any,
) -> Optional[AuditRecord]:
    """
    Record the audit entry for a mutation that is already committed.
    AuditError is logged and swallowed: the mutation stands, the request still succeeds.
    """
    try:
        return await recorder.record(action_type, entity_type, entity_id, actor_name, snapshot)
    except AuditError as e:
        logger.error(
            "audit_write_failed_after_commit",
            extra={
                "action_type": ActionType(action_type).value,
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "actor_name": actor_name,
                "error": e.message,
            },
        )
        return None
