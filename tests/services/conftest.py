"""Service test fixtures — async SQLite store, fakeredis cache, fake oracle.

Invariants:
    - Every test gets a fresh in-memory SQLite database and a fresh Redis server
    - fake_source records every oracle call for call-count assertions

Design Decisions:
    - SQLite in-memory: fast, no external dependency, enforces the unique keys
    - fakeredis FakeServer per test: real redis-py client code, isolated state
"""

import fakeredis
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import payroll_sync.models  # noqa: F401
from payroll_sync.db.base import Base
from payroll_sync.infrastructure.redis_cache import RedisCacheStore
from payroll_sync.repositories import EmployeeRepository
from payroll_sync.services.contribution_cache import (
    CacheCounters,
    ContributionCacheService,
)
from payroll_sync.services.employee_sync import EmployeeSyncService

from tests.fakes import FakeMasterDataSource


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def fake_source():
    return FakeMasterDataSource()


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
async def fake_redis(redis_server):
    client = fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
def cache_store(fake_redis):
    return RedisCacheStore(fake_redis)


@pytest.fixture
def employee_store(test_db):
    return EmployeeRepository(test_db)


@pytest.fixture
def sync_service(employee_store, fake_source):
    return EmployeeSyncService(employee_store, fake_source)


@pytest.fixture
def counters():
    return CacheCounters()


@pytest.fixture
def cache_service(cache_store, fake_source, counters):
    return ContributionCacheService(cache_store, fake_source, counters, ttl_seconds=60)
