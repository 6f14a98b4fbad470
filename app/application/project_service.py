"""Project application service. Orchestrates repository, entity cache and audit trail."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from app.application.audit_trail import audit_after_commit
from app.application.repositories import ProjectRepository
from app.audit.models import ActionType
from app.audit.recorder import AuditRecorder
from app.core.pagination import Page, PageRequest
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.domain.models.project import Project, ProjectStatus
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest
from app.domain.validators import validate_date_range, validate_deadline, validate_search_term
from app.infrastructure.cache.entity_cache import EntityCache

ENTITY_TYPE = "Project"
CACHE_KIND = "project"


def _today_utc() -> date:
    return datetime.now(timezone.utc).date()


class ProjectService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Mutations commit first, then audit; audit failure never undoes a committed mutation.
    """

    def __init__(
        self,
        repository: ProjectRepository,
        recorder: AuditRecorder,
        cache: EntityCache,
        logger: logging.Logger,
        today: Callable[[], date] = _today_utc,
    ) -> None:
        self._repository = repository
        self._recorder = recorder
        self._cache = cache
        self._logger = logger
        self._today = today

    async def _require(self, project_id: uuid.UUID) -> Project:
        project = await self._repository.get(project_id)
        if project is None:
            raise EntityNotFoundError(ENTITY_TYPE, project_id)
        return project

    async def _audit(self, action_type: ActionType, project: Project, actor_name: str) -> None:
        await audit_after_commit(
            self._recorder, self._logger, action_type, ENTITY_TYPE, project.id, actor_name, project
        )

    async def create_project(self, request: ProjectCreateRequest, actor_name: str) -> ProjectResponse:
        if await self._repository.exists_by_name(request.name):
            raise DuplicateEntityError(f"Project with name '{request.name}' already exists")
        validate_deadline(request.deadline, self._today())

        project = await self._repository.create(
            Project(
                id=uuid.uuid4(),
                name=request.name.strip(),
                description=request.description,
                deadline=request.deadline,
                status=request.status,
            )
        )
        self._logger.info("project_created", extra={"project_id": str(project.id)})
        await self._audit(ActionType.CREATE, project, actor_name)
        return ProjectResponse.from_domain(project)

    async def get_project(self, project_id: uuid.UUID) -> ProjectResponse:
        cached = await self._cache.get(CACHE_KIND, project_id, ProjectResponse)
        if cached is not None:
            return cached
        response = ProjectResponse.from_domain(await self._require(project_id))
        await self._cache.put(CACHE_KIND, project_id, response)
        return response

    async def list_projects(self, page: PageRequest) -> Page[ProjectResponse]:
        return (await self._repository.list(page)).map(ProjectResponse.from_domain)

    async def update_project(
        self, project_id: uuid.UUID, request: ProjectUpdateRequest, actor_name: str
    ) -> ProjectResponse:
        project = await self._require(project_id)
        changes = request.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name is not None:
            # A case-only rename cannot collide with another project.
            if new_name.strip().lower() != project.name.lower() and await self._repository.exists_by_name(new_name):
                raise DuplicateEntityError(f"Project with name '{new_name}' already exists")
            project.name = new_name.strip()
        if "description" in changes:
            project.description = changes["description"]
        if changes.get("deadline") is not None:
            project.deadline = changes["deadline"]
        if changes.get("status") is not None:
            project.status = ProjectStatus(changes["status"])

        updated = await self._repository.update(project)
        await self._cache.invalidate(CACHE_KIND, project_id)
        self._logger.info("project_updated", extra={"project_id": str(project_id)})
        await self._audit(ActionType.UPDATE, updated, actor_name)
        return ProjectResponse.from_domain(updated)

    async def delete_project(self, project_id: uuid.UUID, actor_name: str) -> None:
        project = await self._require(project_id)
        await self._repository.delete(project_id)
        await self._cache.invalidate(CACHE_KIND, project_id)
        self._logger.info("project_deleted", extra={"project_id": str(project_id)})
        await self._audit(ActionType.DELETE, project, actor_name)

    async def get_projects_by_status(self, status: ProjectStatus, page: PageRequest) -> Page[ProjectResponse]:
        return (await self._repository.find_by_status(status, page)).map(ProjectResponse.from_domain)

    async def get_overdue_projects(self) -> List[ProjectResponse]:
        return [ProjectResponse.from_domain(p) for p in await self._repository.find_overdue(self._today())]

    async def get_projects_without_tasks(self) -> List[ProjectResponse]:
        return [ProjectResponse.from_domain(p) for p in await self._repository.find_without_tasks()]

    async def search_projects_by_name(self, name: Optional[str], page: PageRequest) -> Page[ProjectResponse]:
        term = validate_search_term(name)
        return (await self._repository.search_by_name(term, page)).map(ProjectResponse.from_domain)

    async def get_projects_by_deadline_range(self, start: date, end: date) -> List[ProjectResponse]:
        validate_date_range(start, end)
        projects = await self._repository.find_by_deadline_between(start, end)
        return [ProjectResponse.from_domain(p) for p in projects]

    async def count_by_status(self, status: ProjectStatus) -> int:
        return await self._repository.count_by_status(status)
