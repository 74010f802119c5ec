"""Contribution TTL Cache — cache-aside reads of oracle contributions, keyed per employee.

Invariants:
    - Key is "contributions:{rssb_number}"; value is the JSON wire array; TTL fixed per service
    - Hit: no oracle call, hit counter +1, payload decoded in stored order
    - Miss: miss counter +1, one oracle call, result cached then returned in oracle order
    - Oracle failure propagates (UpstreamUnavailableError); nothing is cached, no empty list
    - Cache-store failure degrades to an uncached oracle read; it never fails the request
    - Two reads inside one TTL window return identical data, even if oracle changed

Design Decisions:
    - Entries are never deleted explicitly; expiry is Redis' job
    - Concurrent misses for one key both fetch and set: last writer wins
    - CacheCounters are process-local and owned by the application (app.state)
"""

import json
import logging
from dataclasses import dataclass

from payroll_sync.core.errors import CacheUnavailableError, DecodeFailureError
from payroll_sync.core.ports import CacheStore, MasterDataSource
from payroll_sync.core.records import (
    ContributionRecord,
    contribution_to_wire,
    contributions_from_wire,
)

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "contributions:"
DEFAULT_TTL_SECONDS = 60


def contributions_cache_key(rssb_number: str) -> str:
    return f"{CACHE_KEY_PREFIX}{rssb_number}"


@dataclass
class CacheCounters:
    """Hit/miss tallies since process start."""
    hits: int = 0
    misses: int = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    keys: int

    @property
    def hit_rate(self) -> float:
        """Percentage of lookups served from cache."""
        total = self.hits + self.misses
        return (self.hits / total) * 100 if total else 0.0


class ContributionCacheService:
    """Serves employee contributions through a TTL cache in front of oracle."""

    def __init__(
        self,
        cache: CacheStore,
        source: MasterDataSource,
        counters: CacheCounters,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self._cache = cache
        self._source = source
        self._counters = counters
        self.ttl_seconds = ttl_seconds

    async def get_contributions_by_employee(
        self, rssb_number: str,
    ) -> list[ContributionRecord]:
        key = contributions_cache_key(rssb_number)
        log_extra = {
            "rssb_number": rssb_number,
            "cache_key": key,
            "operation": "get_contributions",
        }

        cached = await self._read_cache(key, log_extra)
        if cached is not None:
            self._counters.record_hit()
            logger.info(
                f"Cache hit for contributions of employee {rssb_number}",
                extra={**log_extra, "count": len(cached)},
            )
            return cached

        self._counters.record_miss()
        logger.info(
            f"Cache miss for contributions of employee {rssb_number}, "
            "fetching from oracle",
            extra=log_extra,
        )
        try:
            contributions = await self._source.get_contributions(rssb_number)
        except Exception as e:
            logger.error(
                f"Failed to get contributions for employee {rssb_number}: {e}",
                extra={**log_extra, "error_code": getattr(e, "code", None)},
            )
            raise

        await self._write_cache(key, contributions, log_extra)
        return contributions

    async def get_cache_stats(self) -> CacheStats:
        keys = await self._cache.count_keys(f"{CACHE_KEY_PREFIX}*")
        return CacheStats(
            hits=self._counters.hits,
            misses=self._counters.misses,
            keys=keys,
        )

    async def _read_cache(
        self, key: str, log_extra: dict,
    ) -> list[ContributionRecord] | None:
        try:
            payload = await self._cache.get(key)
        except CacheUnavailableError as e:
            logger.warning(
                f"Cache read failed, falling back to oracle: {e.message}",
                extra={**log_extra, "error_code": e.code},
            )
            return None
        if payload is None:
            return None
        try:
            return contributions_from_wire(json.loads(payload))
        except (ValueError, DecodeFailureError) as e:
            logger.warning(
                f"Discarding undecodable cache entry: {e}", extra=log_extra,
            )
            return None

    async def _write_cache(
        self, key: str, contributions: list[ContributionRecord], log_extra: dict,
    ) -> None:
        payload = json.dumps([contribution_to_wire(c) for c in contributions])
        try:
            await self._cache.set(key, payload, self.ttl_seconds)
        except CacheUnavailableError as e:
            logger.warning(
                f"Cache write failed, serving uncached result: {e.message}",
                extra={**log_extra, "error_code": e.code},
            )
            return
        logger.info(
            f"Cached contributions with TTL {self.ttl_seconds}s",
            extra={**log_extra, "ttl_seconds": self.ttl_seconds, "count": len(contributions)},
        )
