"""Redis Cache Store — string get/set-with-TTL and key counting over redis.asyncio.

Invariants:
    - get() returns None on miss, the stored string on hit
    - set() always writes with an expiry (SET key value EX ttl)
    - count_keys() uses SCAN, never KEYS: approximate under concurrent writes,
      never blocks the server
    - Every RedisError maps to CacheUnavailableError(operation)

Design Decisions:
    - Client built once in the lifespan with bounded retries and socket timeout;
      tests pass a fakeredis client straight to RedisCacheStore
    - decode_responses=True: payloads are JSON text
"""

import logging

from redis.asyncio import Redis
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from payroll_sync.core.errors import CacheUnavailableError, ErrorContext

logger = logging.getLogger(__name__)

SCAN_BATCH_SIZE = 500


def create_redis_client(
    host: str,
    port: int,
    db: int = 0,
    max_retries: int = 3,
    socket_timeout_seconds: float = 5.0,
) -> Redis:
    """Build the process-wide Redis client."""
    return Redis(
        host=host,
        port=port,
        db=db,
        socket_timeout=socket_timeout_seconds,
        socket_connect_timeout=socket_timeout_seconds,
        retry=Retry(ExponentialBackoff(), max_retries),
        retry_on_error=[RedisConnectionError, RedisTimeoutError],
        decode_responses=True,
    )


class RedisCacheStore:
    """CacheStore backed by Redis."""

    def __init__(self, client: Redis):
        self._client = client

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as e:
            raise CacheUnavailableError(
                str(e), "get", ErrorContext(cache_key=key, operation="cache_get"),
            ) from e
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise CacheUnavailableError(
                str(e), "set", ErrorContext(cache_key=key, operation="cache_set"),
            ) from e

    async def count_keys(self, pattern: str) -> int:
        count = 0
        try:
            async for _ in self._client.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                count += 1
        except RedisError as e:
            raise CacheUnavailableError(
                str(e), "scan", ErrorContext(operation="cache_scan"),
            ) from e
        return count

    async def health_check(self) -> bool:
        """Check Redis connectivity (for readiness probes)."""
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
