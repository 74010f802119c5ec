"""API test fixtures — both FastAPI apps wired in-process.

Invariants:
    - oracle and imisanzu each own a fresh in-memory SQLite database
    - imisanzu's MasterDataClient talks to the oracle app through httpx.ASGITransport
    - imisanzu's cache is a fakeredis server per test
    - Lifespans are not run: handles are placed on app.state directly

Design Decisions:
    - Real oracle app as the upstream instead of canned responses: the wire
      format is exercised end to end
    - oracle_calls counts requests reaching oracle from imisanzu
"""

import fakeredis
import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from payroll_sync.config import Settings
from payroll_sync.infrastructure.database import DatabaseSessionManager
from payroll_sync.infrastructure.master_data_client import MasterDataClient
from payroll_sync.infrastructure.redis_cache import RedisCacheStore
from payroll_sync.main import create_imisanzu_app, create_oracle_app

MEMORY_DB = "sqlite+aiosqlite:///:memory:"


class _CountingTransport(httpx.AsyncBaseTransport):
    """Forwards to the oracle app and records each request path."""

    def __init__(self, app):
        self._inner = ASGITransport(app=app)
        self.paths: list[str] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.paths.append(request.url.path)
        return await self._inner.handle_async_request(request)


async def _memory_db() -> DatabaseSessionManager:
    manager = DatabaseSessionManager(MEMORY_DB)
    await manager.create_tables()
    return manager


@pytest.fixture
def settings():
    return Settings(
        database_url=MEMORY_DB,
        oracle_service_url="http://oracle.test",
        contributions_cache_ttl_seconds=60,
    )


@pytest.fixture
async def oracle_app(settings):
    app = create_oracle_app(settings)
    app.state.db_manager = await _memory_db()
    yield app
    await app.state.db_manager.dispose()


@pytest.fixture
def oracle_transport(oracle_app):
    return _CountingTransport(oracle_app)


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
async def imisanzu_app(settings, oracle_transport, redis_server):
    app = create_imisanzu_app(settings)
    app.state.db_manager = await _memory_db()
    app.state.master_data_client = MasterDataClient(
        settings.oracle_service_url, transport=oracle_transport,
    )
    app.state.cache_store = RedisCacheStore(
        fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True),
    )
    yield app
    await app.state.master_data_client.aclose()
    await app.state.cache_store.aclose()
    await app.state.db_manager.dispose()


@pytest.fixture
async def oracle(oracle_app):
    async with AsyncClient(
        transport=ASGITransport(app=oracle_app), base_url="http://oracle.test",
    ) as c:
        yield c


@pytest.fixture
async def imisanzu(imisanzu_app):
    async with AsyncClient(
        transport=ASGITransport(app=imisanzu_app), base_url="http://imisanzu.test",
    ) as c:
        yield c


@pytest.fixture
def oracle_calls(oracle_transport):
    return oracle_transport.paths

