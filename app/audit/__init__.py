"""Audit trail: recording, querying and display projection. No FastAPI."""

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.notifier import AuditNotifier, LoggingAuditNotifier
from app.audit.query_service import AuditQueryService
from app.audit.recorder import AuditRecorder
from app.audit.repository import AuditRepository
from app.audit.schemas import AuditRecordView

__all__ = [
    "ActionType",
    "AuditError",
    "AuditNotifier",
    "AuditQueryService",
    "AuditRecord",
    "AuditRecordView",
    "AuditRecorder",
    "AuditRepository",
    "LoggingAuditNotifier",
]
