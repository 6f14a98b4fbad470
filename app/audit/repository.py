"""Audit repository protocol. Audit layer depends on this; infrastructure implements it."""

from datetime import datetime
from typing import List, Protocol

from app.audit.models import ActionType, AuditRecord
from app.core.pagination import Page, PageRequest


class AuditRepository(Protocol):
    """Protocol for the append-mostly audit store. There is no update operation."""

    async def save(self, record: AuditRecord) -> AuditRecord:
        """Insert record; return it with the store-assigned id."""
        ...

    async def find_by_entity(
        self, entity_type: str, entity_id: str, page: PageRequest
    ) -> Page[AuditRecord]:
        ...

    async def find_by_actor(self, actor_name: str, page: PageRequest) -> Page[AuditRecord]:
        """Records by actor, newest first."""
        ...

    async def find_by_action_type(self, action_type: ActionType) -> List[AuditRecord]:
        """Unpaged: every record with the given action type."""
        ...

    async def find_by_timestamp_between(self, start: datetime, end: datetime) -> List[AuditRecord]:
        """Unpaged: every record with start <= timestamp <= end."""
        ...

    async def find_all(self, page: PageRequest) -> Page[AuditRecord]:
        """All records, newest first."""
        ...

    async def count_by_entity_type(self, entity_type: str) -> int:
        ...

    async def count_by_action_type(self, action_type: ActionType) -> int:
        ...

    async def count_by_actor(self, actor_name: str) -> int:
        ...

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every record with timestamp < cutoff; return how many were removed."""
        ...
