"""Fixtures for API tests: aiosqlite stores, in-memory Redis, AsyncClient over the real app."""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api import dependencies
from app.audit.notifier import LoggingAuditNotifier
from app.audit.query_service import AuditQueryService
from app.audit.recorder import AuditRecorder
from app.infrastructure.database.audit_repository_db import DbAuditRepository
from app.infrastructure.database.session import get_db
from app.main import app


@pytest.fixture
def recorder(audit_sessionmaker):
    return AuditRecorder(repository=DbAuditRepository(audit_sessionmaker), notifier=LoggingAuditNotifier())


@pytest.fixture
def app_with_overrides(entity_sessionmaker, audit_sessionmaker, recorder, fake_redis):
    """App wired to throwaway sqlite stores and an in-memory cache."""

    async def override_get_db():
        async with entity_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[dependencies.get_audit_recorder] = lambda: recorder
    app.dependency_overrides[dependencies.get_audit_query_service] = lambda: AuditQueryService(
        DbAuditRepository(audit_sessionmaker)
    )
    app.dependency_overrides[dependencies.get_redis_client] = lambda: fake_redis
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides, recorder):
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await recorder.wait_for_pending()


@pytest.fixture
def actor_headers():
    return {"X-Actor-Name": "alice"}
