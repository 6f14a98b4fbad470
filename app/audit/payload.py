"""Snapshot flattening for audit payloads. Best-effort: a snapshot that cannot be captured degrades to a minimal payload."""

import dataclasses
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from app.audit.models import CAPTURE_TIME_KEY, ENTITY_CLASS_KEY, ERROR_KEY

logger = logging.getLogger(__name__)

SERIALIZATION_ERROR_MESSAGE = "Failed to serialize entity"


def _snapshot_fields(snapshot: Any) -> Any:
    """Return something pydantic-core can walk: the snapshot itself, or its public attributes."""
    if isinstance(snapshot, BaseModel):
        return snapshot
    if dataclasses.is_dataclass(snapshot) and not isinstance(snapshot, type):
        return snapshot
    if isinstance(snapshot, Mapping):
        return dict(snapshot)
    if hasattr(snapshot, "__dict__"):
        return {k: v for k, v in vars(snapshot).items() if not k.startswith("_")}
    raise TypeError(f"{type(snapshot).__name__} has no fields to capture")


def flatten_snapshot(snapshot: Any) -> Dict[str, Any]:
    """
    Convert an entity snapshot into a JSON-compatible key -> value mapping.
    Raises TypeError / ValueError (incl. PydanticSerializationError) for circular or unsupported structures.
    """
    flattened = to_jsonable_python(_snapshot_fields(snapshot))
    if not isinstance(flattened, dict):
        raise TypeError(f"{type(snapshot).__name__} did not flatten to a mapping")
    return flattened


def build_payload(snapshot: Any, captured_at: datetime) -> Dict[str, Any]:
    """
    Build the audit payload for a snapshot. None -> empty mapping, no metadata.
    Otherwise the flattened fields plus _entityClass and _captureTime; on failure only the metadata and _error.
    """
    if snapshot is None:
        return {}

    entity_class = type(snapshot).__name__
    capture_time = captured_at.isoformat()
    try:
        payload = flatten_snapshot(snapshot)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(
            "audit_payload_serialization_failed",
            extra={"entity_class": entity_class, "error": str(e)},
        )
        return {
            ENTITY_CLASS_KEY: entity_class,
            ERROR_KEY: SERIALIZATION_ERROR_MESSAGE,
            CAPTURE_TIME_KEY: capture_time,
        }

    payload[ENTITY_CLASS_KEY] = entity_class
    payload[CAPTURE_TIME_KEY] = capture_time
    return payload
