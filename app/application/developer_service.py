"""Developer application service."""

import logging
import uuid
from typing import List, Optional

from app.application.audit_trail import audit_after_commit
from app.application.repositories import DeveloperRepository
from app.audit.models import ActionType
from app.audit.recorder import AuditRecorder
from app.core.pagination import Page, PageRequest
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.domain.models.developer import Developer
from app.domain.schemas.developer import (
    DeveloperCreateRequest,
    DeveloperResponse,
    DeveloperSummaryResponse,
    DeveloperUpdateRequest,
)
from app.domain.validators import validate_search_term
from app.infrastructure.cache.entity_cache import EntityCache

ENTITY_TYPE = "Developer"
CACHE_KIND = "developer"
TOP_DEVELOPERS_LIMIT = 5


class DeveloperService:
    """Developer CRUD and lookups. Email is unique; deleting a developer leaves their tasks unassigned."""

    def __init__(
        self,
        repository: DeveloperRepository,
        recorder: AuditRecorder,
        cache: EntityCache,
        logger: logging.Logger,
    ) -> None:
        self._repository = repository
        self._recorder = recorder
        self._cache = cache
        self._logger = logger

    async def _require(self, developer_id: uuid.UUID) -> Developer:
        developer = await self._repository.get(developer_id)
        if developer is None:
            raise EntityNotFoundError(ENTITY_TYPE, developer_id)
        return developer

    async def _audit(self, action_type: ActionType, developer: Developer, actor_name: str) -> None:
        await audit_after_commit(
            self._recorder, self._logger, action_type, ENTITY_TYPE, developer.id, actor_name, developer
        )

    async def create_developer(self, request: DeveloperCreateRequest, actor_name: str) -> DeveloperResponse:
        if await self._repository.exists_by_email(request.email):
            raise DuplicateEntityError(f"Developer with email '{request.email}' already exists")

        developer = await self._repository.create(
            Developer(
                id=uuid.uuid4(),
                name=request.name.strip(),
                email=request.email,
                skills=request.skills,
            )
        )
        self._logger.info("developer_created", extra={"developer_id": str(developer.id)})
        await self._audit(ActionType.CREATE, developer, actor_name)
        return DeveloperResponse.from_domain(developer)

    async def get_developer(self, developer_id: uuid.UUID) -> DeveloperResponse:
        cached = await self._cache.get(CACHE_KIND, developer_id, DeveloperResponse)
        if cached is not None:
            return cached
        response = DeveloperResponse.from_domain(await self._require(developer_id))
        await self._cache.put(CACHE_KIND, developer_id, response)
        return response

    async def get_developer_by_email(self, email: str) -> DeveloperResponse:
        developer = await self._repository.get_by_email(email)
        if developer is None:
            raise EntityNotFoundError(ENTITY_TYPE, email)
        return DeveloperResponse.from_domain(developer)

    async def list_developers(self, page: PageRequest) -> Page[DeveloperResponse]:
        return (await self._repository.list(page)).map(DeveloperResponse.from_domain)

    async def update_developer(
        self, developer_id: uuid.UUID, request: DeveloperUpdateRequest, actor_name: str
    ) -> DeveloperResponse:
        developer = await self._require(developer_id)
        changes = request.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email is not None and new_email != developer.email:
            if await self._repository.exists_by_email(new_email):
                raise DuplicateEntityError(f"Developer with email '{new_email}' already exists")
            developer.email = new_email
        if changes.get("name") is not None:
            developer.name = changes["name"].strip()
        if "skills" in changes:
            developer.skills = changes["skills"]

        updated = await self._repository.update(developer)
        await self._cache.invalidate(CACHE_KIND, developer_id)
        self._logger.info("developer_updated", extra={"developer_id": str(developer_id)})
        await self._audit(ActionType.UPDATE, updated, actor_name)
        return DeveloperResponse.from_domain(updated)

    async def delete_developer(self, developer_id: uuid.UUID, actor_name: str) -> None:
        developer = await self._require(developer_id)
        await self._repository.delete(developer_id)
        await self._cache.invalidate(CACHE_KIND, developer_id)
        self._logger.info("developer_deleted", extra={"developer_id": str(developer_id)})
        await self._audit(ActionType.DELETE, developer, actor_name)

    async def search_developers_by_name(self, name: Optional[str], page: PageRequest) -> Page[DeveloperResponse]:
        term = validate_search_term(name)
        return (await self._repository.search_by_name(term, page)).map(DeveloperResponse.from_domain)

    async def search_developers_by_skill(self, skill: Optional[str], page: PageRequest) -> Page[DeveloperResponse]:
        term = validate_search_term(skill)
        return (await self._repository.search_by_skill(term, page)).map(DeveloperResponse.from_domain)

    async def get_top_developers_by_task_count(self) -> List[DeveloperSummaryResponse]:
        developers = await self._repository.top_by_task_count(TOP_DEVELOPERS_LIMIT)
        return [DeveloperSummaryResponse.model_validate(d) for d in developers]

    async def get_developers_without_tasks(self) -> List[DeveloperSummaryResponse]:
        developers = await self._repository.find_without_tasks()
        return [DeveloperSummaryResponse.model_validate(d) for d in developers]

    async def get_total_developer_count(self) -> int:
        return await self._repository.count()
