"""FastAPI dependency injection: DB session, Redis, publisher, audit recorder/query service, domain services, actor."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.developer_service import DeveloperService
from app.application.project_service import ProjectService
from app.application.task_service import TaskService
from app.audit.notifier import AuditNotifier, LoggingAuditNotifier
from app.audit.query_service import AuditQueryService
from app.audit.recorder import AuditRecorder
from app.config.settings import get_settings
from app.core.context import DEFAULT_ACTOR
from app.infrastructure.cache.entity_cache import EntityCache
from app.infrastructure.cache.redis_client import RedisClient
from app.infrastructure.database.audit_repository_db import DbAuditRepository
from app.infrastructure.database.developer_repository_db import DbDeveloperRepository
from app.infrastructure.database.project_repository_db import DbProjectRepository
from app.infrastructure.database.session import get_audit_sessionmaker, get_db
from app.infrastructure.database.task_repository_db import DbTaskRepository
from app.infrastructure.messaging.audit_notifier_rabbitmq import RabbitMQAuditNotifier
from app.infrastructure.messaging.rabbitmq_publisher import RabbitMQPublisher

_redis_client: RedisClient | None = None
_publisher: RabbitMQPublisher | None = None
_audit_recorder: AuditRecorder | None = None


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client


def get_publisher() -> RabbitMQPublisher:
    """Return singleton RabbitMQ publisher."""
    global _publisher
    if _publisher is None:
        _publisher = RabbitMQPublisher()
    return _publisher


def _build_audit_notifier() -> AuditNotifier:
    if get_settings().audit_notifier == "rabbitmq":
        return RabbitMQAuditNotifier(get_publisher())
    return LoggingAuditNotifier()


def get_audit_recorder() -> AuditRecorder:
    """Return singleton AuditRecorder; it owns the in-flight notification tasks."""
    global _audit_recorder
    if _audit_recorder is None:
        _audit_recorder = AuditRecorder(
            repository=DbAuditRepository(get_audit_sessionmaker()),
            notifier=_build_audit_notifier(),
            logger=logging.getLogger("app.audit.recorder"),
        )
    return _audit_recorder


def get_audit_query_service() -> AuditQueryService:
    return AuditQueryService(
        repository=DbAuditRepository(get_audit_sessionmaker()),
        logger=logging.getLogger("app.audit.query_service"),
    )


def get_entity_cache(
    redis: Annotated[RedisClient, Depends(get_redis_client)],
) -> EntityCache:
    return EntityCache(redis, ttl=get_settings().entity_cache_ttl)


async def get_project_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    cache: Annotated[EntityCache, Depends(get_entity_cache)],
) -> ProjectService:
    return ProjectService(
        repository=DbProjectRepository(db),
        recorder=recorder,
        cache=cache,
        logger=logging.getLogger("app.application.project_service"),
    )


async def get_developer_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    cache: Annotated[EntityCache, Depends(get_entity_cache)],
) -> DeveloperService:
    return DeveloperService(
        repository=DbDeveloperRepository(db),
        recorder=recorder,
        cache=cache,
        logger=logging.getLogger("app.application.developer_service"),
    )


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
) -> TaskService:
    return TaskService(
        repository=DbTaskRepository(db),
        project_repository=DbProjectRepository(db),
        developer_repository=DbDeveloperRepository(db),
        recorder=recorder,
        logger=logging.getLogger("app.application.task_service"),
    )


def get_actor(request: Request) -> str:
    """Extract actor name from request.state (set by middleware)."""
    return getattr(request.state, "actor", None) or DEFAULT_ACTOR


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""


async def shutdown_dependencies() -> None:
    """Drain pending audit notifications, then close Redis and RabbitMQ connections."""
    global _redis_client, _publisher, _audit_recorder
    if _audit_recorder is not None:
        await _audit_recorder.wait_for_pending()
        _audit_recorder = None
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None
    if _publisher is not None:
        await _publisher.close()
        _publisher = None
