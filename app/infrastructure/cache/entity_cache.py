"""Redis-backed read-through cache for entity responses. TTL eviction; explicit invalidation on write."""

import logging
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError
from redis.exceptions import RedisError

from app.infrastructure.cache.redis_client import RedisClient

ENTITY_CACHE_PREFIX = "entity:"
DEFAULT_ENTITY_TTL = 600  # 10 minutes

M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


def _key(kind: str, entity_id) -> str:
    return f"{ENTITY_CACHE_PREFIX}{kind}:{entity_id}"


class EntityCache:
    """
    Caches pydantic response models as JSON under entity:<kind>:<id>.
    Redis is never authoritative: errors are logged and treated as a miss, never raised.
    """

    def __init__(self, redis_client: RedisClient, ttl: int = DEFAULT_ENTITY_TTL) -> None:
        self._redis = redis_client
        self._ttl = ttl

    async def get(self, kind: str, entity_id, model: Type[M]) -> Optional[M]:
        try:
            raw = await self._redis.get_cache(_key(kind, entity_id))
        except RedisError as e:
            logger.warning("entity_cache_read_failed", extra={"kind": kind, "error": str(e)})
            return None
        if not raw:
            return None
        try:
            return model.model_validate_json(raw)
        except ValidationError:
            logger.warning("entity_cache_stale_entry", extra={"kind": kind, "entity_id": str(entity_id)})
            return None

    async def put(self, kind: str, entity_id, value: BaseModel) -> None:
        try:
            await self._redis.set_cache(_key(kind, entity_id), value.model_dump_json(), ttl=self._ttl)
        except RedisError as e:
            logger.warning("entity_cache_write_failed", extra={"kind": kind, "error": str(e)})

    async def invalidate(self, kind: str, entity_id) -> None:
        try:
            await self._redis.delete_key(_key(kind, entity_id))
        except RedisError as e:
            logger.warning("entity_cache_invalidate_failed", extra={"kind": kind, "error": str(e)})
