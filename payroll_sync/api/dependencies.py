"""FastAPI Dependencies — wire request-scoped services from app.state handles.

Invariants:
    - Long-lived handles (db manager, oracle client, cache store, counters) live on
      app.state and are created by the application lifespan
    - Repositories and services are built per request around that request's session
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_sync.core.ports import CacheStore, MasterDataSource
from payroll_sync.infrastructure.database import get_db
from payroll_sync.repositories import (
    ContributionRepository,
    EmployeeRepository,
    EmployerRepository,
)
from payroll_sync.services.contribution_cache import (
    CacheCounters,
    ContributionCacheService,
)
from payroll_sync.services.employee_sync import EmployeeSyncService
from payroll_sync.services.master_data import (
    ContributionService,
    EmployeeService,
    EmployerService,
)


def _state_handle(request: Request, name: str):
    handle = getattr(request.app.state, name, None)
    if handle is None:
        raise RuntimeError(f"{name} not initialized")
    return handle


def get_master_data_source(request: Request) -> MasterDataSource:
    return _state_handle(request, "master_data_client")


def get_cache_store(request: Request) -> CacheStore:
    return _state_handle(request, "cache_store")


def get_cache_counters(request: Request) -> CacheCounters:
    return _state_handle(request, "cache_counters")


# ─── imisanzu ───────────────────────────────────────────────────

def get_employee_sync_service(
    db: AsyncSession = Depends(get_db),
    source: MasterDataSource = Depends(get_master_data_source),
) -> EmployeeSyncService:
    return EmployeeSyncService(EmployeeRepository(db), source)


def get_contribution_cache_service(
    request: Request,
    cache: CacheStore = Depends(get_cache_store),
    source: MasterDataSource = Depends(get_master_data_source),
    counters: CacheCounters = Depends(get_cache_counters),
) -> ContributionCacheService:
    settings = request.app.state.settings
    return ContributionCacheService(
        cache, source, counters,
        ttl_seconds=settings.contributions_cache_ttl_seconds,
    )


# ─── oracle ─────────────────────────────────────────────────────

def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    return EmployeeService(EmployeeRepository(db))


def get_employer_service(db: AsyncSession = Depends(get_db)) -> EmployerService:
    return EmployerService(EmployerRepository(db))


def get_contribution_service(db: AsyncSession = Depends(get_db)) -> ContributionService:
    return ContributionService(ContributionRepository(db))
