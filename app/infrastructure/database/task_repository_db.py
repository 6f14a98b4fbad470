"""DB-backed task repository."""

import uuid
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import Page, PageRequest
from app.domain.models.task import Task, TaskStatus
from app.infrastructure.database.models import TaskModel, as_utc
from app.infrastructure.database.repository import AsyncRepository, order_clause, paginate

_SORT_COLUMNS = {
    "created_at": TaskModel.created_at,
    "updated_at": TaskModel.updated_at,
    "title": TaskModel.title,
    "due_date": TaskModel.due_date,
    "status": TaskModel.status,
}


def _to_domain(orm: TaskModel) -> Task:
    return Task(
        id=orm.id,
        title=orm.title,
        description=orm.description,
        status=TaskStatus(orm.status),
        due_date=orm.due_date,
        project_id=orm.project_id,
        developer_id=orm.developer_id,
        created_at=as_utc(orm.created_at),
        updated_at=as_utc(orm.updated_at),
    )


class DbTaskRepository:
    """Implements TaskRepository protocol over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._crud = AsyncRepository(session, TaskModel)

    def _order(self, page: PageRequest):
        return [order_clause(_SORT_COLUMNS, page, "created_at"), TaskModel.id]

    async def _page(self, stmt, page: PageRequest) -> Page[Task]:
        return (await paginate(self._session, stmt, page, self._order(page))).map(_to_domain)

    async def _all(self, stmt) -> List[Task]:
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def create(self, task: Task) -> Task:
        orm = TaskModel(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            due_date=task.due_date,
            project_id=task.project_id,
            developer_id=task.developer_id,
        )
        return _to_domain(await self._crud.add(orm))

    async def get(self, task_id: uuid.UUID) -> Optional[Task]:
        orm = await self._crud.get_by_id(task_id)
        return _to_domain(orm) if orm else None

    async def update(self, task: Task) -> Task:
        orm = await self._crud.get_by_id(task.id)
        orm.title = task.title
        orm.description = task.description
        orm.status = task.status.value
        orm.due_date = task.due_date
        orm.project_id = task.project_id
        orm.developer_id = task.developer_id
        return _to_domain(await self._crud.save(orm))

    async def delete(self, task_id: uuid.UUID) -> None:
        orm = await self._crud.get_by_id(task_id)
        if orm is not None:
            await self._crud.remove(orm)

    async def list(self, page: PageRequest) -> Page[Task]:
        return (await self._crud.list_page(page, self._order(page))).map(_to_domain)

    async def find_by_project(self, project_id: uuid.UUID, page: PageRequest) -> Page[Task]:
        return await self._page(select(TaskModel).where(TaskModel.project_id == project_id), page)

    async def find_by_developer(self, developer_id: uuid.UUID, page: PageRequest) -> Page[Task]:
        return await self._page(select(TaskModel).where(TaskModel.developer_id == developer_id), page)

    async def find_by_status(self, status: TaskStatus, page: PageRequest) -> Page[Task]:
        return await self._page(select(TaskModel).where(TaskModel.status == status.value), page)

    async def find_overdue(self, today: date) -> List[Task]:
        return await self._all(
            select(TaskModel)
            .where(
                TaskModel.due_date.is_not(None),
                TaskModel.due_date < today,
                TaskModel.status != TaskStatus.COMPLETED.value,
            )
            .order_by(TaskModel.due_date.asc())
        )

    async def find_unassigned(self) -> List[Task]:
        return await self._all(
            select(TaskModel)
            .where(TaskModel.developer_id.is_(None))
            .order_by(TaskModel.created_at.desc())
        )

    async def count_by_status(
        self,
        project_id: Optional[uuid.UUID] = None,
        developer_id: Optional[uuid.UUID] = None,
    ) -> Dict[TaskStatus, int]:
        """Task counts per status, every status present (zero when absent)."""
        stmt = select(TaskModel.status, func.count()).group_by(TaskModel.status)
        if project_id is not None:
            stmt = stmt.where(TaskModel.project_id == project_id)
        if developer_id is not None:
            stmt = stmt.where(TaskModel.developer_id == developer_id)
        counts = {status: 0 for status in TaskStatus}
        for status, count in (await self._session.execute(stmt)).all():
            counts[TaskStatus(status)] = int(count)
        return counts
