"""AuditRecorder: persistence, error wrapping, fire-and-forget notification."""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.audit.exceptions import AuditError
from app.audit.models import ActionType, AuditRecord
from app.audit.recorder import AuditRecorder

NOW = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


async def _echo_with_id(record: AuditRecord) -> AuditRecord:
    return replace(record, id="audit-1")


@pytest.fixture
def repository():
    repo = AsyncMock()
    repo.save = AsyncMock(side_effect=_echo_with_id)
    return repo


@pytest.fixture
def notifier():
    n = AsyncMock()
    n.publish = AsyncMock(return_value=None)
    return n


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def recorder(repository, notifier, logger):
    return AuditRecorder(repository=repository, notifier=notifier, logger=logger, clock=lambda: NOW)


async def test_record_persists_and_returns_stored_record(recorder, repository):
    saved = await recorder.record(ActionType.CREATE, "Project", "p-1", "alice", {"name": "Apollo"})

    assert repository.save.await_count == 1
    stored = repository.save.call_args[0][0]
    assert isinstance(stored, AuditRecord)
    assert stored.action_type == ActionType.CREATE
    assert stored.entity_type == "Project"
    assert stored.entity_id == "p-1"
    assert stored.actor_name == "alice"
    assert stored.timestamp == NOW
    assert stored.payload["name"] == "Apollo"
    assert saved.id == "audit-1"
    with pytest.raises(AttributeError):
        saved.actor_name = "mallory"  # type: ignore[misc]


async def test_none_snapshot_stores_empty_payload(recorder, repository):
    await recorder.record(ActionType.DELETE, "Task", "t-1", "bob", None)
    assert repository.save.call_args[0][0].payload == {}


async def test_entity_id_is_stringified(recorder, repository):
    await recorder.record(ActionType.UPDATE, "Task", 42, "bob")
    assert repository.save.call_args[0][0].entity_id == "42"


async def test_empty_entity_type_rejected(recorder, repository):
    with pytest.raises(ValueError):
        await recorder.record(ActionType.CREATE, "  ", "x", "bob")
    repository.save.assert_not_awaited()


async def test_persistence_failure_raises_audit_error(recorder, repository, notifier):
    cause = ConnectionError("audit store down")
    repository.save = AsyncMock(side_effect=cause)

    with pytest.raises(AuditError) as exc_info:
        await recorder.record(ActionType.CREATE, "Project", "p-1", "alice", {"name": "x"})

    assert exc_info.value.__cause__ is cause
    assert "Failed to create audit log" in exc_info.value.message
    await recorder.wait_for_pending()
    notifier.publish.assert_not_awaited()


async def test_notification_sent_after_write(recorder, notifier):
    saved = await recorder.record(ActionType.CREATE, "Developer", "d-1", "alice")
    await recorder.wait_for_pending()
    notifier.publish.assert_awaited_once_with(saved)
    assert recorder.pending_notifications == 0


async def test_notification_failure_is_swallowed(recorder, notifier, logger):
    notifier.publish = AsyncMock(side_effect=RuntimeError("broker unreachable"))

    saved = await recorder.record(ActionType.UPDATE, "Project", "p-1", "alice")
    await recorder.wait_for_pending()

    assert saved.id == "audit-1"
    logged = [call.args[0] for call in logger.error.call_args_list]
    assert "audit_notification_failed" in logged


async def test_record_does_not_wait_for_notification(recorder, notifier):
    release = asyncio.Event()

    async def slow_publish(record):
        await release.wait()

    notifier.publish = AsyncMock(side_effect=slow_publish)

    await recorder.record(ActionType.CREATE, "Task", "t-1", "alice")
    assert recorder.pending_notifications == 1

    release.set()
    await recorder.wait_for_pending()
    assert recorder.pending_notifications == 0
