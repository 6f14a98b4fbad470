"""ProjectService: uniqueness, deadline rule, cache use, post-commit auditing."""

import uuid
from dataclasses import replace
from datetime import date
from unittest.mock import AsyncMock

import pytest

from app.application.project_service import ProjectService
from app.audit.exceptions import AuditError
from app.audit.models import ActionType
from app.core.pagination import Page, PageRequest
from app.domain.exceptions import DomainValidationError, DuplicateEntityError, EntityNotFoundError
from app.domain.models.project import Project, ProjectStatus
from app.domain.schemas.project import ProjectCreateRequest, ProjectResponse, ProjectUpdateRequest

TODAY = date(2025, 6, 15)


def _project(**overrides) -> Project:
    fields = dict(id=uuid.uuid4(), name="Apollo", deadline=date(2025, 12, 31), status=ProjectStatus.PLANNING)
    fields.update(overrides)
    return Project(**fields)


@pytest.fixture
def repository():
    r = AsyncMock()
    r.exists_by_name = AsyncMock(return_value=False)
    r.create = AsyncMock(side_effect=lambda p: p)
    r.update = AsyncMock(side_effect=lambda p: p)
    r.delete = AsyncMock(return_value=None)
    return r


@pytest.fixture
def service(repository, recorder, cache, logger):
    return ProjectService(
        repository=repository,
        recorder=recorder,
        cache=cache,
        logger=logger,
        today=lambda: TODAY,
    )


async def test_create_project_audits_with_snapshot(service, repository, recorder):
    request = ProjectCreateRequest(name="  Apollo ", deadline=date(2025, 12, 31), description="Moon")

    response = await service.create_project(request, "alice")

    assert response.name == "Apollo"
    created = repository.create.call_args[0][0]
    recorder.record.assert_awaited_once_with(ActionType.CREATE, "Project", created.id, "alice", created)


async def test_create_project_duplicate_name(service, repository, recorder):
    repository.exists_by_name = AsyncMock(return_value=True)

    with pytest.raises(DuplicateEntityError):
        await service.create_project(ProjectCreateRequest(name="Apollo", deadline=date(2025, 12, 31)), "alice")

    repository.create.assert_not_awaited()
    recorder.record.assert_not_awaited()


async def test_create_project_past_deadline(service, repository):
    with pytest.raises(DomainValidationError):
        await service.create_project(ProjectCreateRequest(name="Apollo", deadline=date(2025, 6, 14)), "alice")
    repository.create.assert_not_awaited()


async def test_audit_failure_does_not_fail_mutation(service, repository, recorder, logger):
    recorder.record = AsyncMock(side_effect=AuditError("Failed to create audit log: down"))

    response = await service.create_project(ProjectCreateRequest(name="Apollo", deadline=date(2025, 12, 31)), "alice")

    assert response.name == "Apollo"
    repository.create.assert_awaited_once()
    assert logger.error.call_args[0][0] == "audit_write_failed_after_commit"


async def test_get_project_uses_cache(service, repository, cache):
    project = _project()
    cached = ProjectResponse.from_domain(project)
    cache.get = AsyncMock(return_value=cached)

    assert await service.get_project(project.id) is cached
    repository.get.assert_not_awaited()


async def test_get_project_miss_populates_cache(service, repository, cache):
    project = _project()
    repository.get = AsyncMock(return_value=project)

    response = await service.get_project(project.id)

    assert response.id == project.id
    cache.put.assert_awaited_once_with("project", project.id, response)


async def test_get_project_not_found(service, repository):
    repository.get = AsyncMock(return_value=None)
    with pytest.raises(EntityNotFoundError):
        await service.get_project(uuid.uuid4())


async def test_update_project_applies_set_fields_and_invalidates(service, repository, recorder, cache):
    project = _project(description="old")
    repository.get = AsyncMock(return_value=replace(project))

    response = await service.update_project(
        project.id, ProjectUpdateRequest(status=ProjectStatus.IN_PROGRESS), "bob"
    )

    assert response.status == ProjectStatus.IN_PROGRESS
    assert response.description == "old"
    repository.exists_by_name.assert_not_awaited()
    cache.invalidate.assert_awaited_once_with("project", project.id)
    assert recorder.record.call_args[0][:4] == (ActionType.UPDATE, "Project", project.id, "bob")


async def test_update_project_rename_to_taken_name(service, repository):
    project = _project()
    repository.get = AsyncMock(return_value=project)
    repository.exists_by_name = AsyncMock(return_value=True)

    with pytest.raises(DuplicateEntityError):
        await service.update_project(project.id, ProjectUpdateRequest(name="Gemini"), "bob")
    repository.update.assert_not_awaited()


async def test_update_project_same_name_different_case_is_allowed(service, repository):
    project = _project()
    repository.get = AsyncMock(return_value=project)

    response = await service.update_project(project.id, ProjectUpdateRequest(name="APOLLO"), "bob")

    repository.exists_by_name.assert_not_awaited()
    assert response.name == "APOLLO"
    assert repository.update.call_args[0][0].name == "APOLLO"


async def test_delete_project(service, repository, recorder, cache):
    project = _project()
    repository.get = AsyncMock(return_value=project)

    await service.delete_project(project.id, "carol")

    repository.delete.assert_awaited_once_with(project.id)
    cache.invalidate.assert_awaited_once_with("project", project.id)
    recorder.record.assert_awaited_once_with(ActionType.DELETE, "Project", project.id, "carol", project)


async def test_delete_missing_project_is_not_audited(service, repository, recorder):
    repository.get = AsyncMock(return_value=None)
    with pytest.raises(EntityNotFoundError):
        await service.delete_project(uuid.uuid4(), "carol")
    recorder.record.assert_not_awaited()


async def test_overdue_uses_today(service, repository):
    repository.find_overdue = AsyncMock(return_value=[_project(deadline=date(2025, 1, 1))])

    result = await service.get_overdue_projects()

    repository.find_overdue.assert_awaited_once_with(TODAY)
    assert len(result) == 1


async def test_search_rejects_blank_term(service):
    with pytest.raises(DomainValidationError):
        await service.search_projects_by_name("   ", PageRequest())


async def test_search_strips_term(service, repository):
    repository.search_by_name = AsyncMock(return_value=Page(content=[], page=0, size=20, total_elements=0))
    await service.search_projects_by_name(" apo ", PageRequest())
    assert repository.search_by_name.call_args[0][0] == "apo"


async def test_deadline_range_rejects_inverted_range(service):
    with pytest.raises(DomainValidationError):
        await service.get_projects_by_deadline_range(date(2025, 2, 1), date(2025, 1, 1))
