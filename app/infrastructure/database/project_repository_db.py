"""DB-backed project repository. Persists projects to the relational entity store."""

import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import Page, PageRequest
from app.domain.models.project import Project, ProjectStatus
from app.infrastructure.database.models import ProjectModel, TaskModel, as_utc
from app.infrastructure.database.repository import AsyncRepository, order_clause, paginate

_SORT_COLUMNS = {
    "created_at": ProjectModel.created_at,
    "updated_at": ProjectModel.updated_at,
    "name": ProjectModel.name,
    "deadline": ProjectModel.deadline,
    "status": ProjectModel.status,
}


def _to_domain(orm: ProjectModel) -> Project:
    return Project(
        id=orm.id,
        name=orm.name,
        description=orm.description,
        deadline=orm.deadline,
        status=ProjectStatus(orm.status),
        created_at=as_utc(orm.created_at),
        updated_at=as_utc(orm.updated_at),
    )


class DbProjectRepository:
    """Implements ProjectRepository protocol over an AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._crud = AsyncRepository(session, ProjectModel)

    def _order(self, page: PageRequest):
        return [order_clause(_SORT_COLUMNS, page, "created_at"), ProjectModel.id]

    async def create(self, project: Project) -> Project:
        orm = ProjectModel(
            id=project.id,
            name=project.name,
            description=project.description,
            deadline=project.deadline,
            status=project.status.value,
        )
        return _to_domain(await self._crud.add(orm))

    async def get(self, project_id: uuid.UUID) -> Optional[Project]:
        orm = await self._crud.get_by_id(project_id)
        return _to_domain(orm) if orm else None

    async def update(self, project: Project) -> Project:
        orm = await self._crud.get_by_id(project.id)
        orm.name = project.name
        orm.description = project.description
        orm.deadline = project.deadline
        orm.status = project.status.value
        return _to_domain(await self._crud.save(orm))

    async def delete(self, project_id: uuid.UUID) -> None:
        """Delete the project and its tasks in one transaction."""
        await self._session.execute(delete(TaskModel).where(TaskModel.project_id == project_id))
        await self._session.execute(delete(ProjectModel).where(ProjectModel.id == project_id))
        await self._session.commit()

    async def exists_by_name(self, name: str) -> bool:
        stmt = select(exists().where(func.lower(ProjectModel.name) == name.strip().lower()))
        return bool(await self._session.scalar(stmt))

    async def list(self, page: PageRequest) -> Page[Project]:
        result = await self._crud.list_page(page, self._order(page))
        return result.map(_to_domain)

    async def find_by_status(self, status: ProjectStatus, page: PageRequest) -> Page[Project]:
        stmt = select(ProjectModel).where(ProjectModel.status == status.value)
        return (await paginate(self._session, stmt, page, self._order(page))).map(_to_domain)

    async def find_overdue(self, today: date) -> List[Project]:
        stmt = (
            select(ProjectModel)
            .where(
                ProjectModel.deadline < today,
                ProjectModel.status != ProjectStatus.COMPLETED.value,
            )
            .order_by(ProjectModel.deadline.asc())
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def find_without_tasks(self) -> List[Project]:
        stmt = (
            select(ProjectModel)
            .where(~exists().where(TaskModel.project_id == ProjectModel.id))
            .order_by(ProjectModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def search_by_name(self, term: str, page: PageRequest) -> Page[Project]:
        stmt = select(ProjectModel).where(ProjectModel.name.ilike(f"%{term}%"))
        return (await paginate(self._session, stmt, page, self._order(page))).map(_to_domain)

    async def find_by_deadline_between(self, start: date, end: date) -> List[Project]:
        stmt = (
            select(ProjectModel)
            .where(ProjectModel.deadline.between(start, end))
            .order_by(ProjectModel.deadline.asc())
        )
        result = await self._session.execute(stmt)
        return [_to_domain(orm) for orm in result.scalars().all()]

    async def count_by_status(self, status: ProjectStatus) -> int:
        stmt = select(func.count()).select_from(ProjectModel).where(ProjectModel.status == status.value)
        return int(await self._session.scalar(stmt) or 0)
