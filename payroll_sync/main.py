"""Payroll Sync APIs — FastAPI application factories for oracle and imisanzu.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PayrollError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Long-lived handles (db manager, oracle client, Redis) are created in the
      lifespan, stored on app.state, and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Two factories sharing one package: oracle owns the master data,
      imisanzu mirrors employees and caches contributions
    - Run with: uvicorn payroll_sync.main:oracle_app / payroll_sync.main:imisanzu_app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payroll_sync.api.error_handlers import register_error_handlers
from payroll_sync.api.routes import (
    health,
    imisanzu_contributions,
    imisanzu_employees,
    oracle_contributions,
    oracle_employees,
    oracle_employers,
)
from payroll_sync.config import Settings, get_settings
from payroll_sync.infrastructure.database import DatabaseSessionManager
from payroll_sync.infrastructure.master_data_client import MasterDataClient
from payroll_sync.infrastructure.observability import setup_logging
from payroll_sync.infrastructure.redis_cache import RedisCacheStore, create_redis_client
from payroll_sync.services.contribution_cache import CacheCounters

logger = logging.getLogger(__name__)


async def _open_database(app: FastAPI, settings: Settings) -> None:
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await app.state.db_manager.create_tables()


@asynccontextmanager
async def oracle_lifespan(app: FastAPI):
    """Startup/shutdown lifecycle for the oracle service."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    await _open_database(app, settings)
    logger.info("Oracle API started", extra={"service": app.title})
    yield
    logger.info("Oracle API shutting down", extra={"service": app.title})
    await app.state.db_manager.dispose()


@asynccontextmanager
async def imisanzu_lifespan(app: FastAPI):
    """Startup/shutdown lifecycle for the imisanzu service."""
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    await _open_database(app, settings)
    app.state.master_data_client = MasterDataClient(
        settings.oracle_service_url,
        timeout_seconds=settings.oracle_timeout_seconds,
        max_retries=settings.oracle_max_retries,
    )
    app.state.cache_store = RedisCacheStore(create_redis_client(
        settings.redis_host,
        settings.redis_port,
        db=settings.redis_db,
        max_retries=settings.redis_max_retries,
        socket_timeout_seconds=settings.redis_socket_timeout_seconds,
    ))
    logger.info("imisanzu API started", extra={"service": app.title})
    yield
    logger.info("imisanzu API shutting down", extra={"service": app.title})
    await app.state.master_data_client.aclose()
    await app.state.cache_store.aclose()
    await app.state.db_manager.dispose()


def _base_app(title: str, lifespan, settings: Settings) -> FastAPI:
    app = FastAPI(title=title, version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(health.router)
    return app


def create_oracle_app(settings: Settings | None = None) -> FastAPI:
    app = _base_app("oracle", oracle_lifespan, settings or get_settings())
    app.include_router(oracle_employees.router)
    app.include_router(oracle_employers.router)
    app.include_router(oracle_contributions.router)
    return app


def create_imisanzu_app(settings: Settings | None = None) -> FastAPI:
    app = _base_app("imisanzu", imisanzu_lifespan, settings or get_settings())
    # Counters outlive requests but not the process
    app.state.cache_counters = CacheCounters()
    app.include_router(imisanzu_employees.router)
    app.include_router(imisanzu_contributions.router)
    return app


oracle_app = create_oracle_app()
imisanzu_app = create_imisanzu_app()
