"""Derived display text for audit records. Pure functions."""

from datetime import datetime
from typing import Any, Mapping

from app.audit.models import ActionType, AuditRecord
from app.audit.schemas import AuditRecordView

DISPLAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DESCRIPTION_PREVIEW_LENGTH = 50
ELLIPSIS = "..."
NO_CHANGES = "No changes recorded"

_ACTION_TEMPLATES = {
    ActionType.CREATE: "Created a new {entity}",
    ActionType.UPDATE: "Updated {entity}",
    ActionType.DELETE: "Deleted {entity}",
}


def describe_action(action_type: ActionType, entity_type: str) -> str:
    """'Created a new task', 'Updated project', 'Deleted developer'."""
    return _ACTION_TEMPLATES[ActionType(action_type)].format(entity=entity_type.lower())


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime(DISPLAY_TIMESTAMP_FORMAT)


def summarize_changes(payload: Mapping[str, Any]) -> str:
    """
    Cosmetic summary of the captured payload (not a diff).
    Picks name / status / description when present and not null; otherwise reports the field count.
    """
    if not payload:
        return NO_CHANGES

    parts = []
    if payload.get("name") is not None:
        parts.append(f"Name: {payload['name']}")
    if payload.get("status") is not None:
        parts.append(f"Status: {payload['status']}")
    if payload.get("description") is not None:
        description = str(payload["description"])
        if len(description) > DESCRIPTION_PREVIEW_LENGTH:
            description = description[:DESCRIPTION_PREVIEW_LENGTH] + ELLIPSIS
        parts.append(f"Description: {description}")

    if not parts:
        return f"Entity modified with {len(payload)} field(s) changed"
    return "; ".join(parts)


def to_view(record: AuditRecord) -> AuditRecordView:
    return AuditRecordView(
        id=record.id,
        action_type=record.action_type,
        action_description=describe_action(record.action_type, record.entity_type),
        entity_type=record.entity_type,
        entity_id=record.entity_id,
        timestamp=record.timestamp,
        formatted_timestamp=format_timestamp(record.timestamp),
        actor_name=record.actor_name,
        payload=dict(record.payload),
        changes_summary=summarize_changes(record.payload),
    )
