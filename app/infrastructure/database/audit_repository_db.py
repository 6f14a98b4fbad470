"""DB-backed audit repository. Persists audit records as JSON documents in the audit store (audit_logs table)."""

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.audit.models import ActionType, AuditRecord
from app.core.pagination import Page, PageRequest
from app.infrastructure.database.models import AuditLogModel, as_utc
from app.infrastructure.database.repository import order_clause, paginate

_SORT_COLUMNS = {
    "timestamp": AuditLogModel.timestamp,
    "action_type": AuditLogModel.action_type,
    "entity_type": AuditLogModel.entity_type,
    "entity_id": AuditLogModel.entity_id,
    "actor_name": AuditLogModel.actor_name,
}

_NEWEST_FIRST = PageRequest(sort_by="timestamp", sort_dir="desc")


def to_utc(value: datetime) -> datetime:
    """Audit timestamps and query bounds are compared in UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _tie_break(page: PageRequest):
    """Equal sort keys fall back to insertion order, in the same direction."""
    return AuditLogModel.seq.desc() if page.descending else AuditLogModel.seq.asc()


def _to_record(orm: AuditLogModel) -> AuditRecord:
    return AuditRecord(
        id=orm.id,
        action_type=ActionType(orm.action_type),
        entity_type=orm.entity_type,
        entity_id=orm.entity_id,
        actor_name=orm.actor_name,
        timestamp=as_utc(orm.timestamp),
        payload=dict(orm.payload or {}),
    )


class DbAuditRepository:
    """
    Implements AuditRepository protocol. Opens one short session per call, so a single
    instance can be shared across requests and background tasks.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, record: AuditRecord) -> AuditRecord:
        orm = AuditLogModel(
            id=str(uuid.uuid4()),
            action_type=record.action_type.value,
            entity_type=record.entity_type,
            entity_id=record.entity_id,
            actor_name=record.actor_name,
            timestamp=to_utc(record.timestamp),
            payload=record.payload,
        )
        async with self._session_factory() as session:
            session.add(orm)
            await session.commit()
        return replace(record, id=orm.id, timestamp=to_utc(record.timestamp))

    async def _page(self, stmt, page: PageRequest, ordering: PageRequest) -> Page[AuditRecord]:
        order = [order_clause(_SORT_COLUMNS, ordering, "timestamp"), _tie_break(ordering)]
        async with self._session_factory() as session:
            result = await paginate(session, stmt, page, order)
        return result.map(_to_record)

    async def _all(self, stmt) -> List[AuditRecord]:
        async with self._session_factory() as session:
            result = await session.execute(
                stmt.order_by(AuditLogModel.timestamp.desc(), AuditLogModel.seq.desc())
            )
            return [_to_record(orm) for orm in result.scalars().all()]

    async def _count(self, *criteria) -> int:
        stmt = select(func.count()).select_from(AuditLogModel).where(*criteria)
        async with self._session_factory() as session:
            return int(await session.scalar(stmt) or 0)

    async def find_by_entity(self, entity_type: str, entity_id: str, page: PageRequest) -> Page[AuditRecord]:
        stmt = select(AuditLogModel).where(
            AuditLogModel.entity_type == entity_type,
            AuditLogModel.entity_id == entity_id,
        )
        return await self._page(stmt, page, page)

    async def find_by_actor(self, actor_name: str, page: PageRequest) -> Page[AuditRecord]:
        stmt = select(AuditLogModel).where(AuditLogModel.actor_name == actor_name)
        return await self._page(stmt, page, _NEWEST_FIRST)

    async def find_by_action_type(self, action_type: ActionType) -> List[AuditRecord]:
        return await self._all(
            select(AuditLogModel).where(AuditLogModel.action_type == ActionType(action_type).value)
        )

    async def find_by_timestamp_between(self, start: datetime, end: datetime) -> List[AuditRecord]:
        return await self._all(
            select(AuditLogModel).where(AuditLogModel.timestamp.between(to_utc(start), to_utc(end)))
        )

    async def find_all(self, page: PageRequest) -> Page[AuditRecord]:
        return await self._page(select(AuditLogModel), page, _NEWEST_FIRST)

    async def count_by_entity_type(self, entity_type: str) -> int:
        return await self._count(AuditLogModel.entity_type == entity_type)

    async def count_by_action_type(self, action_type: ActionType) -> int:
        return await self._count(AuditLogModel.action_type == ActionType(action_type).value)

    async def count_by_actor(self, actor_name: str) -> int:
        return await self._count(AuditLogModel.actor_name == actor_name)

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = delete(AuditLogModel).where(AuditLogModel.timestamp < to_utc(cutoff))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            await session.commit()
        return int(result.rowcount or 0)
