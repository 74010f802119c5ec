"""imisanzu Contributions — oracle contributions behind the TTL cache.

Invariants:
    - Oracle failure on a cache miss surfaces as 503 UPSTREAM_UNAVAILABLE
    - /cache/stats is declared before any path that could shadow it
"""

from fastapi import APIRouter, Depends

from payroll_sync.api.dependencies import get_contribution_cache_service
from payroll_sync.core.validation import validate_rssb_number
from payroll_sync.schemas.contribution import CacheStatsResponse, ContributionResponse
from payroll_sync.services.contribution_cache import ContributionCacheService

router = APIRouter(prefix="/api/v1/contributions", tags=["contribution"])


@router.get("/cache/stats", response_model=CacheStatsResponse)
async def get_cache_stats(
    service: ContributionCacheService = Depends(get_contribution_cache_service),
):
    """Cache statistics for monitoring."""
    stats = await service.get_cache_stats()
    return CacheStatsResponse(
        hit=stats.hits, miss=stats.misses, keys=stats.keys, hit_rate=stats.hit_rate,
    )


@router.get("/employee/{rssb_number}", response_model=list[ContributionResponse])
async def get_contributions_by_employee(
    rssb_number: str,
    service: ContributionCacheService = Depends(get_contribution_cache_service),
):
    """Employee contributions, cached from oracle."""
    rssb_number = validate_rssb_number(rssb_number)
    return await service.get_contributions_by_employee(rssb_number)
