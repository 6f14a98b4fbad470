"""Immutable audit record model. Domain-level immutability."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ActionType(str, Enum):
    """Closed set of mutating actions that produce an audit record."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


# Payload metadata keys added by the recorder
ENTITY_CLASS_KEY = "_entityClass"
CAPTURE_TIME_KEY = "_captureTime"
ERROR_KEY = "_error"


@dataclass(frozen=True)
class AuditRecord:
    """
    Immutable audit record: what happened (action_type), to which entity, by whom, when (UTC).
    id is None until the audit store assigns one on insert.
    """

    action_type: ActionType
    entity_type: str
    entity_id: str
    actor_name: str
    timestamp: datetime
    payload: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Structured representation for JSON logging and notification messages."""
        return {
            "id": self.id,
            "action_type": self.action_type.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "actor_name": self.actor_name,
            "timestamp": self.timestamp.isoformat(),
            "payload": self.payload,
        }
