"""DeveloperService: unique email, lookups, post-commit auditing."""

import uuid
from unittest.mock import AsyncMock

import pytest

from app.application.developer_service import DeveloperService
from app.audit.models import ActionType
from app.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from app.domain.models.developer import Developer
from app.domain.schemas.developer import DeveloperCreateRequest, DeveloperUpdateRequest


def _developer(**overrides) -> Developer:
    fields = dict(id=uuid.uuid4(), name="Ada", email="ada@example.com", skills="python")
    fields.update(overrides)
    return Developer(**fields)


@pytest.fixture
def repository():
    r = AsyncMock()
    r.exists_by_email = AsyncMock(return_value=False)
    r.create = AsyncMock(side_effect=lambda d: d)
    r.update = AsyncMock(side_effect=lambda d: d)
    return r


@pytest.fixture
def service(repository, recorder, cache, logger):
    return DeveloperService(repository=repository, recorder=recorder, cache=cache, logger=logger)


async def test_create_developer_normalizes_email_and_audits(service, repository, recorder):
    response = await service.create_developer(
        DeveloperCreateRequest(name="Ada", email=" Ada@Example.com ", skills="python"), "alice"
    )

    assert response.email == "ada@example.com"
    repository.exists_by_email.assert_awaited_once_with("ada@example.com")
    assert recorder.record.call_args[0][:4] == (ActionType.CREATE, "Developer", response.id, "alice")


async def test_create_developer_duplicate_email(service, repository):
    repository.exists_by_email = AsyncMock(return_value=True)
    with pytest.raises(DuplicateEntityError):
        await service.create_developer(DeveloperCreateRequest(name="Ada", email="ada@example.com"), "alice")


async def test_update_developer_email_conflict(service, repository):
    developer = _developer()
    repository.get = AsyncMock(return_value=developer)
    repository.exists_by_email = AsyncMock(return_value=True)

    with pytest.raises(DuplicateEntityError):
        await service.update_developer(developer.id, DeveloperUpdateRequest(email="bob@example.com"), "alice")


async def test_update_developer_skills(service, repository, cache, recorder):
    developer = _developer()
    repository.get = AsyncMock(return_value=developer)

    response = await service.update_developer(developer.id, DeveloperUpdateRequest(skills="go, rust"), "alice")

    assert response.skills == "go, rust"
    cache.invalidate.assert_awaited_once_with("developer", developer.id)
    assert recorder.record.call_args[0][0] == ActionType.UPDATE


async def test_get_by_email_not_found(service, repository):
    repository.get_by_email = AsyncMock(return_value=None)
    with pytest.raises(EntityNotFoundError):
        await service.get_developer_by_email("ghost@example.com")


async def test_top_developers_limit_and_counts(service, repository):
    repository.top_by_task_count = AsyncMock(return_value=[_developer(task_count=4)])

    top = await service.get_top_developers_by_task_count()

    repository.top_by_task_count.assert_awaited_once_with(5)
    assert top[0].task_count == 4


async def test_delete_developer_audits(service, repository, recorder):
    developer = _developer()
    repository.get = AsyncMock(return_value=developer)

    await service.delete_developer(developer.id, "alice")

    repository.delete.assert_awaited_once_with(developer.id)
    recorder.record.assert_awaited_once_with(ActionType.DELETE, "Developer", developer.id, "alice", developer)
