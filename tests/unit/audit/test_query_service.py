"""AuditQueryService: delegation, in-memory pagination, error wrapping."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.query_service import AuditQueryService
from app.core.pagination import Page, PageRequest

BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _record(i: int, action_type: ActionType = ActionType.CREATE, actor: str = "alice") -> AuditRecord:
    return AuditRecord(
        id=f"a-{i}",
        action_type=action_type,
        entity_type="Task",
        entity_id=f"t-{i}",
        actor_name=actor,
        timestamp=BASE + timedelta(minutes=i),
        payload={"title": f"task {i}"},
    )


@pytest.fixture
def repository():
    return AsyncMock()


@pytest.fixture
def service(repository):
    return AuditQueryService(repository=repository, logger=MagicMock())


async def test_trail_for_entity_maps_to_views(service, repository):
    page = PageRequest(page=0, size=10)
    repository.find_by_entity = AsyncMock(
        return_value=Page(content=[_record(1)], page=0, size=10, total_elements=1)
    )

    result = await service.get_trail_for_entity("Task", "t-1", page)

    repository.find_by_entity.assert_awaited_once_with("Task", "t-1", page)
    assert result.total_elements == 1
    assert result.content[0].action_description == "Created a new task"


async def test_actions_by_type_sorted_and_paged_in_memory(service, repository):
    repository.find_by_action_type = AsyncMock(return_value=[_record(i) for i in range(5)])

    result = await service.get_actions_by_type(ActionType.CREATE, PageRequest(page=0, size=2))

    assert [v.id for v in result.content] == ["a-4", "a-3"]
    assert result.total_elements == 5
    assert result.total_pages == 3


async def test_actions_by_type_ascending_last_page(service, repository):
    repository.find_by_action_type = AsyncMock(return_value=[_record(i) for i in range(5)])

    result = await service.get_actions_by_type(
        ActionType.CREATE, PageRequest(page=2, size=2, sort_dir="asc")
    )

    assert [v.id for v in result.content] == ["a-4"]


async def test_offset_past_end_gives_empty_page(service, repository):
    repository.find_by_action_type = AsyncMock(return_value=[_record(i) for i in range(3)])

    result = await service.get_actions_by_type(ActionType.CREATE, PageRequest(page=5, size=2))

    assert result.content == []
    assert result.total_elements == 3
    assert result.page == 5


async def test_date_range_offset_past_end_gives_empty_page(service, repository):
    repository.find_by_timestamp_between = AsyncMock(return_value=[_record(i) for i in range(4)])

    result = await service.get_by_date_range(BASE, BASE + timedelta(hours=1), PageRequest(page=1, size=4))

    assert result.content == []
    assert result.total_elements == 4


async def test_unknown_sort_key_falls_back_to_timestamp(service, repository):
    repository.find_by_timestamp_between = AsyncMock(return_value=[_record(2), _record(0), _record(1)])

    result = await service.get_by_date_range(
        BASE, BASE + timedelta(hours=1), PageRequest(sort_by="nope", sort_dir="desc")
    )

    assert [v.id for v in result.content] == ["a-2", "a-1", "a-0"]


async def test_sort_by_actor(service, repository):
    repository.find_by_action_type = AsyncMock(
        return_value=[_record(0, actor="carol"), _record(1, actor="alice"), _record(2, actor="bob")]
    )

    result = await service.get_actions_by_type(
        ActionType.CREATE, PageRequest(sort_by="actor_name", sort_dir="asc")
    )

    assert [v.actor_name for v in result.content] == ["alice", "bob", "carol"]


async def test_counts_delegate(service, repository):
    repository.count_by_entity_type = AsyncMock(return_value=7)
    repository.count_by_action_type = AsyncMock(return_value=3)
    repository.count_by_actor = AsyncMock(return_value=2)

    assert await service.count_by_entity_type("Task") == 7
    assert await service.count_by_action_type(ActionType.DELETE) == 3
    assert await service.count_by_actor("alice") == 2
    repository.count_by_action_type.assert_awaited_once_with(ActionType.DELETE)


async def test_cleanup_returns_deleted_count(service, repository):
    repository.delete_older_than = AsyncMock(return_value=4)
    cutoff = BASE + timedelta(days=30)

    assert await service.cleanup_older_than(cutoff) == 4
    repository.delete_older_than.assert_awaited_once_with(cutoff)


@pytest.mark.parametrize(
    "method, args, repo_method",
    [
        ("get_trail_for_entity", ("Task", "t-1", PageRequest()), "find_by_entity"),
        ("get_actions_by_actor", ("alice", PageRequest()), "find_by_actor"),
        ("get_actions_by_type", (ActionType.CREATE, PageRequest()), "find_by_action_type"),
        ("get_by_date_range", (BASE, BASE, PageRequest()), "find_by_timestamp_between"),
        ("get_all", (PageRequest(),), "find_all"),
        ("count_by_entity_type", ("Task",), "count_by_entity_type"),
        ("count_by_action_type", (ActionType.UPDATE,), "count_by_action_type"),
        ("count_by_actor", ("alice",), "count_by_actor"),
        ("cleanup_older_than", (BASE,), "delete_older_than"),
    ],
)
async def test_store_failure_raises_audit_error(service, repository, method, args, repo_method):
    cause = RuntimeError("store unavailable")
    setattr(repository, repo_method, AsyncMock(side_effect=cause))

    with pytest.raises(AuditError) as exc_info:
        await getattr(service, method)(*args)

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.message.startswith("Failed to ")


async def test_ascending_ties_keep_insertion_order(service, repository):
    same_time = [replace(_record(i), timestamp=BASE) for i in range(3)]
    # Store hands back newest first.
    repository.find_by_timestamp_between = AsyncMock(return_value=list(reversed(same_time)))

    ascending = await service.get_by_date_range(BASE, BASE, PageRequest(sort_dir="asc"))
    descending = await service.get_by_date_range(BASE, BASE, PageRequest(sort_dir="desc"))

    assert [v.id for v in ascending.content] == ["a-0", "a-1", "a-2"]
    assert [v.id for v in descending.content] == ["a-2", "a-1", "a-0"]
