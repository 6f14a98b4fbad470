# app/infrastructure/database/session.py

from functools import lru_cache
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from app.config.settings import get_settings

# Entity tables and audit tables are declared separately: the audit store may live in its own database.
Base = declarative_base()
AuditBase = declarative_base()


def _engine_kwargs(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, echo=False, **_engine_kwargs(url))


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    return build_engine(get_settings().database_url)


@lru_cache
def get_audit_engine() -> AsyncEngine:
    settings = get_settings()
    if settings.resolved_audit_database_url == settings.database_url:
        return get_engine()
    return build_engine(settings.resolved_audit_database_url)


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(get_engine())


@lru_cache
def get_audit_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return build_sessionmaker(get_audit_engine())


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_sessionmaker()() as session:
        yield session


async def init_models() -> None:
    """Create missing tables on both stores. There is no migration tooling."""
    # Import for side effect: registers ORM classes on Base / AuditBase.
    from app.infrastructure.database import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with get_audit_engine().begin() as conn:
        await conn.run_sync(AuditBase.metadata.create_all)


async def dispose_engines() -> None:
    await get_engine().dispose()
    audit_engine = get_audit_engine()
    if audit_engine is not get_engine():
        await audit_engine.dispose()
