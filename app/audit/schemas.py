"""Pydantic read projection for audit records."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.audit.models import ActionType


class AuditRecordView(BaseModel):
    """Display form of an AuditRecord, with derived description, timestamp text and changes summary."""

    id: Optional[str]
    action_type: ActionType
    action_description: str
    entity_type: str
    entity_id: str
    timestamp: datetime
    formatted_timestamp: str
    actor_name: str
    payload: Dict[str, Any]
    changes_summary: str


class CleanupResponse(BaseModel):
    deleted: int
    cutoff: datetime


class CountResponse(BaseModel):
    key: str
    count: int
