"""Audit query service: filtered, paginated read access to the audit trail plus counts and retention cleanup."""

import logging
from datetime import datetime
from operator import attrgetter
from typing import Awaitable, List, Optional, TypeVar

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.presentation import to_view
from app.audit.repository import AuditRepository
from app.audit.schemas import AuditRecordView
from app.core.pagination import Page, PageRequest, paginate_in_memory

T = TypeVar("T")

AUDIT_SORT_FIELDS = frozenset({"timestamp", "action_type", "entity_type", "entity_id", "actor_name"})
NEWEST_FIRST = "timestamp"


def _sort_records(records: List[AuditRecord], page: PageRequest) -> List[AuditRecord]:
    """
    Records arrive newest first. The sort is stable, so equal keys stay in insertion order
    for the requested direction.
    """
    key = page.sort_by if page.sort_by in AUDIT_SORT_FIELDS else NEWEST_FIRST
    ordered = records if page.descending else list(reversed(records))
    return sorted(ordered, key=attrgetter(key), reverse=page.descending)


class AuditQueryService:
    """
    Read side of the audit trail. Every store failure surfaces as AuditError; nothing returns empty on error.
    Action-type and date-range queries are unpaged in the store and paginated here.
    """

    def __init__(self, repository: AuditRepository, logger: Optional[logging.Logger] = None) -> None:
        self._repository = repository
        self._logger = logger or logging.getLogger(__name__)

    async def _call(self, operation: str, awaitable: Awaitable[T], **context) -> T:
        try:
            return await awaitable
        except Exception as e:
            self._logger.error(
                "audit_query_failed",
                extra={"operation": operation, "error": str(e), **context},
            )
            raise AuditError(f"Failed to {operation}: {e}") from e

    async def get_trail_for_entity(
        self, entity_type: str, entity_id: str, page: Optional[PageRequest] = None
    ) -> Page[AuditRecordView]:
        page = page or PageRequest()
        result = await self._call(
            "retrieve audit trail",
            self._repository.find_by_entity(entity_type, str(entity_id), page),
            entity_type=entity_type,
            entity_id=str(entity_id),
        )
        return result.map(to_view)

    async def get_actions_by_actor(self, actor_name: str, page: PageRequest) -> Page[AuditRecordView]:
        result = await self._call(
            "retrieve user actions",
            self._repository.find_by_actor(actor_name, page),
            actor_name=actor_name,
        )
        return result.map(to_view)

    async def get_actions_by_type(self, action_type: ActionType, page: PageRequest) -> Page[AuditRecordView]:
        records = await self._call(
            "retrieve actions by type",
            self._repository.find_by_action_type(ActionType(action_type)),
            action_type=ActionType(action_type).value,
        )
        return paginate_in_memory(_sort_records(records, page), page).map(to_view)

    async def get_by_date_range(
        self, start: datetime, end: datetime, page: PageRequest
    ) -> Page[AuditRecordView]:
        records = await self._call(
            "retrieve audits by date range",
            self._repository.find_by_timestamp_between(start, end),
            start=start.isoformat(),
            end=end.isoformat(),
        )
        return paginate_in_memory(_sort_records(records, page), page).map(to_view)

    async def get_all(self, page: PageRequest) -> Page[AuditRecordView]:
        result = await self._call("retrieve all audits", self._repository.find_all(page))
        return result.map(to_view)

    async def count_by_entity_type(self, entity_type: str) -> int:
        return await self._call(
            "count audits by entity type",
            self._repository.count_by_entity_type(entity_type),
            entity_type=entity_type,
        )

    async def count_by_action_type(self, action_type: ActionType) -> int:
        return await self._call(
            "count audits by action type",
            self._repository.count_by_action_type(ActionType(action_type)),
            action_type=ActionType(action_type).value,
        )

    async def count_by_actor(self, actor_name: str) -> int:
        return await self._call(
            "count audits by actor",
            self._repository.count_by_actor(actor_name),
            actor_name=actor_name,
        )

    async def cleanup_older_than(self, cutoff: datetime) -> int:
        """Delete every record strictly older than cutoff. Irreversible; returns the number deleted."""
        deleted = await self._call(
            "cleanup old audits",
            self._repository.delete_older_than(cutoff),
            cutoff=cutoff.isoformat(),
        )
        self._logger.info("audit_cleanup", extra={"deleted": deleted, "cutoff": cutoff.isoformat()})
        return deleted
