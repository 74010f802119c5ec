"""Contribution TTL Cache — verifies cache-aside reads, expiry and failure policy.

Invariants:
    - Miss → one oracle call, entry written under contributions:{rssb} with TTL 60
    - Hit within TTL → identical ordered list, zero oracle calls, hit counter +1
    - Expired entry → exactly one new oracle call
    - Oracle failure propagates and caches nothing
    - Redis down → served straight from oracle, never an error
    - Stats report resident contributions:* keys plus hit/miss counters
"""

import asyncio
import json

import fakeredis
import pytest

from payroll_sync.core.errors import (
    CacheUnavailableError,
    UpstreamErrorKind,
    UpstreamUnavailableError,
)
from payroll_sync.infrastructure.redis_cache import RedisCacheStore
from payroll_sync.services.contribution_cache import (
    CacheCounters,
    ContributionCacheService,
    contributions_cache_key,
)

from tests.fakes import contribution


def test_cache_key_format():
    assert contributions_cache_key("1023829A") == "contributions:1023829A"


async def test_miss_fetches_and_caches_with_ttl(
    cache_service, fake_source, fake_redis, counters,
):
    fake_source.contributions["1023829A"] = [
        contribution("2025-01"), contribution("2025-02"),
    ]

    result = await cache_service.get_contributions_by_employee("1023829A")

    assert [c.period for c in result] == ["2025-01", "2025-02"]
    assert fake_source.contribution_calls() == 1
    assert counters.misses == 1 and counters.hits == 0
    ttl = await fake_redis.ttl("contributions:1023829A")
    assert 0 < ttl <= 60
    stored = json.loads(await fake_redis.get("contributions:1023829A"))
    assert [c["period"] for c in stored] == ["2025-01", "2025-02"]
    assert stored[0]["amount"] == "4000000.00"


async def test_hit_within_ttl_returns_identical_data_without_oracle(
    cache_service, fake_source, counters,
):
    fake_source.contributions["1023829A"] = [
        contribution("2025-01"), contribution("2025-02"),
    ]

    first = await cache_service.get_contributions_by_employee("1023829A")
    second = await cache_service.get_contributions_by_employee("1023829A")

    assert second == first
    assert fake_source.contribution_calls() == 1
    assert counters.hits == 1 and counters.misses == 1


async def test_hit_ignores_upstream_changes_inside_ttl(cache_service, fake_source):
    fake_source.contributions["1023829A"] = [contribution("2025-01")]
    first = await cache_service.get_contributions_by_employee("1023829A")

    fake_source.contributions["1023829A"] = [
        contribution("2025-01"), contribution("2025-02"),
    ]
    second = await cache_service.get_contributions_by_employee("1023829A")

    assert second == first


async def test_expired_entry_triggers_exactly_one_refetch(
    cache_service, fake_source, fake_redis,
):
    fake_source.contributions["1023829A"] = [contribution("2025-01")]
    await cache_service.get_contributions_by_employee("1023829A")

    await fake_redis.pexpire("contributions:1023829A", 1)
    await asyncio.sleep(0.05)
    fake_source.contributions["1023829A"] = [
        contribution("2025-01"), contribution("2025-02"),
    ]
    refreshed = await cache_service.get_contributions_by_employee("1023829A")
    again = await cache_service.get_contributions_by_employee("1023829A")

    assert [c.period for c in refreshed] == ["2025-01", "2025-02"]
    assert again == refreshed
    assert fake_source.contribution_calls() == 2


async def test_empty_list_is_cached(cache_service, fake_source, fake_redis):
    result = await cache_service.get_contributions_by_employee("0000000A")
    await cache_service.get_contributions_by_employee("0000000A")

    assert result == []
    assert await fake_redis.get("contributions:0000000A") == "[]"
    assert fake_source.contribution_calls() == 1


async def test_oracle_failure_propagates_and_caches_nothing(
    cache_service, fake_source, fake_redis,
):
    fake_source.contributions["1023829A"] = UpstreamUnavailableError(
        "refused", UpstreamErrorKind.NETWORK,
    )

    with pytest.raises(UpstreamUnavailableError):
        await cache_service.get_contributions_by_employee("1023829A")

    assert await fake_redis.exists("contributions:1023829A") == 0


async def test_undecodable_entry_is_refetched(cache_service, fake_source, fake_redis):
    await fake_redis.set("contributions:1023829A", "{not json", ex=60)
    fake_source.contributions["1023829A"] = [contribution("2025-01")]

    result = await cache_service.get_contributions_by_employee("1023829A")

    assert [c.period for c in result] == ["2025-01"]
    assert fake_source.contribution_calls() == 1


async def test_redis_down_serves_from_oracle(fake_source, redis_server):
    redis_server.connected = False
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    counters = CacheCounters()
    service = ContributionCacheService(RedisCacheStore(client), fake_source, counters)
    fake_source.contributions["1023829A"] = [contribution("2025-01")]

    first = await service.get_contributions_by_employee("1023829A")
    second = await service.get_contributions_by_employee("1023829A")

    assert first == second
    assert fake_source.contribution_calls() == 2
    assert counters.misses == 2


async def test_stats_count_resident_keys(cache_service, fake_source, fake_redis):
    fake_source.contributions["1023829A"] = [
        contribution("2025-01"), contribution("2025-02"),
    ]
    await fake_redis.set("unrelated:key", "x")

    await cache_service.get_contributions_by_employee("1023829A")
    await cache_service.get_contributions_by_employee("1023829A")
    stats = await cache_service.get_cache_stats()

    assert stats.keys == 1
    assert stats.hits == 1
    assert stats.misses == 1
    assert stats.hit_rate == 50.0


async def test_stats_with_no_traffic(cache_service):
    stats = await cache_service.get_cache_stats()
    assert (stats.hits, stats.misses, stats.keys) == (0, 0, 0)
    assert stats.hit_rate == 0.0


async def test_stats_propagate_cache_failure(fake_source, redis_server):
    redis_server.connected = False
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    service = ContributionCacheService(
        RedisCacheStore(client), fake_source, CacheCounters(),
    )

    with pytest.raises(CacheUnavailableError):
        await service.get_cache_stats()
