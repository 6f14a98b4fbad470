# app/infrastructure/cache/redis_client.py

from typing import Optional

import redis.asyncio as redis

from app.config.settings import settings


class RedisClient:
    """Thin async wrapper: string values with TTL, plus delete. Callers own key naming."""

    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(url or settings.redis_url, decode_responses=True)

    async def get_cache(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set_cache(self, key: str, value: str, ttl: int = 300) -> None:
        await self.client.set(key, value, ex=ttl)

    async def delete_key(self, key: str) -> None:
        await self.client.delete(key)

    async def close(self) -> None:
        await self.client.aclose()
