"""DB-backed developer repository."""

import uuid
from typing import List, Optional

from sqlalchemy import exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import Page, PageRequest
from app.domain.models.developer import Developer
from app.infrastructure.database.models import DeveloperModel, TaskModel, as_utc
from app.infrastructure.database.repository import AsyncRepository, order_clause, paginate

_SORT_COLUMNS = {
    "created_at": DeveloperModel.created_at,
    "updated_at": DeveloperModel.updated_at,
    "name": DeveloperModel.name,
    "email": DeveloperModel.email,
}


def _to_domain(orm: DeveloperModel, task_count: int = 0) -> Developer:
    return Developer(
        id=orm.id,
        name=orm.name,
        email=orm.email,
        skills=orm.skills,
        created_at=as_utc(orm.created_at),
        updated_at=as_utc(orm.updated_at),
        task_count=task_count,
    )


class DbDeveloperRepository:
    """Implements DeveloperRepository protocol over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._crud = AsyncRepository(session, DeveloperModel)

    def _order(self, page: PageRequest):
        return [order_clause(_SORT_COLUMNS, page, "created_at"), DeveloperModel.id]

    async def create(self, developer: Developer) -> Developer:
        orm = DeveloperModel(
            id=developer.id,
            name=developer.name,
            email=developer.email,
            skills=developer.skills,
        )
        return _to_domain(await self._crud.add(orm))

    async def get(self, developer_id: uuid.UUID) -> Optional[Developer]:
        orm = await self._crud.get_by_id(developer_id)
        return _to_domain(orm) if orm else None

    async def get_by_email(self, email: str) -> Optional[Developer]:
        stmt = select(DeveloperModel).where(DeveloperModel.email == email.strip().lower())
        orm = (await self._session.execute(stmt)).scalar_one_or_none()
        return _to_domain(orm) if orm else None

    async def update(self, developer: Developer) -> Developer:
        orm = await self._crud.get_by_id(developer.id)
        orm.name = developer.name
        orm.email = developer.email
        orm.skills = developer.skills
        return _to_domain(await self._crud.save(orm))

    async def delete(self, developer_id: uuid.UUID) -> None:
        """Unassign the developer's tasks, then delete the developer, in one transaction."""
        await self._session.execute(
            update(TaskModel).where(TaskModel.developer_id == developer_id).values(developer_id=None)
        )
        orm = await self._crud.get_by_id(developer_id)
        if orm is not None:
            await self._session.delete(orm)
        await self._session.commit()

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(exists().where(DeveloperModel.email == email.strip().lower()))
        return bool(await self._session.scalar(stmt))

    async def list(self, page: PageRequest) -> Page[Developer]:
        return (await self._crud.list_page(page, self._order(page))).map(_to_domain)

    async def search_by_name(self, term: str, page: PageRequest) -> Page[Developer]:
        stmt = select(DeveloperModel).where(DeveloperModel.name.ilike(f"%{term}%"))
        return (await paginate(self._session, stmt, page, self._order(page))).map(_to_domain)

    async def search_by_skill(self, term: str, page: PageRequest) -> Page[Developer]:
        stmt = select(DeveloperModel).where(DeveloperModel.skills.ilike(f"%{term}%"))
        return (await paginate(self._session, stmt, page, self._order(page))).map(_to_domain)

    async def top_by_task_count(self, limit: int) -> List[Developer]:
        task_count = func.count(TaskModel.id).label("task_count")
        stmt = (
            select(DeveloperModel, task_count)
            .outerjoin(TaskModel, TaskModel.developer_id == DeveloperModel.id)
            .group_by(DeveloperModel.id)
            .order_by(task_count.desc(), DeveloperModel.name.asc())
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        return [_to_domain(orm, int(count)) for orm, count in rows]

    async def find_without_tasks(self) -> List[Developer]:
        stmt = (
            select(DeveloperModel)
            .where(~exists().where(TaskModel.developer_id == DeveloperModel.id))
            .order_by(DeveloperModel.name.asc())
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def count(self) -> int:
        return int(await self._session.scalar(select(func.count()).select_from(DeveloperModel)) or 0)
