from __future__ import annotations

import redis.asyncio as redis

from praxis.core.cache_metrics import record_cache_get, record_cache_set
from praxis.core.settings import settings


class _RedisMetricsWrapper:
    """Wraps the Redis client to record cache hits, misses, and sets per keyspace for /metrics/app."""

    def __init__(self, client: redis.Redis):
        self._client = client

    async def get(self, key: str, *args, **kwargs):
        out = await self._client.get(key, *args, **kwargs)
        record_cache_get(key, out is not None)
        return out

    async def set(self, key: str, value: str, *args, **kwargs):
        record_cache_set(key)
        return await self._client.set(key, value, *args, **kwargs)

    async def delete(self, *keys, **kwargs):
        return await self._client.delete(*keys, **kwargs)

    async def ping(self):
        return await self._client.ping()


_real_client = redis.from_url(settings.redis_url, decode_responses=True)
redis_client = _RedisMetricsWrapper(_real_client)
