"""Shared fixtures: aiosqlite-backed entity and audit stores, in-memory Redis."""

import pytest

from app.infrastructure.database import models  # noqa: F401  (registers tables)
from app.infrastructure.database.session import AuditBase, Base, build_engine, build_sessionmaker


class FakeRedis:
    """In-memory stand-in for RedisClient."""

    def __init__(self):
        self._store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get_cache(self, key: str):
        return self._store.get(key)

    async def set_cache(self, key: str, value: str, ttl: int = 300):
        self._store[key] = value
        self.ttls[key] = ttl

    async def delete_key(self, key: str) -> None:
        self._store.pop(key, None)

    async def close(self) -> None:
        self._store.clear()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
async def entity_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'entities.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def audit_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'audit.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(AuditBase.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def entity_sessionmaker(entity_engine):
    return build_sessionmaker(entity_engine)


@pytest.fixture
def audit_sessionmaker(audit_engine):
    return build_sessionmaker(audit_engine)


@pytest.fixture
async def db_session(entity_sessionmaker):
    async with entity_sessionmaker() as session:
        yield session
