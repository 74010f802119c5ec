"""Oracle Contributions — filtered listing and creation.

Invariants:
    - At most one filter applies: rssbNumber, else period, else matricule
    - Filter values are validated before they reach the store
"""

from fastapi import APIRouter, Depends, Query, status

from payroll_sync.api.dependencies import get_contribution_service
from payroll_sync.core.validation import (
    validate_matricule,
    validate_period,
    validate_rssb_number,
)
from payroll_sync.schemas.contribution import ContributionCreate, ContributionResponse
from payroll_sync.services.master_data import ContributionService

router = APIRouter(prefix="/api/v1/contributions", tags=["contribution"])


@router.get("", response_model=list[ContributionResponse])
async def list_contributions(
    rssb_number: str | None = Query(None, alias="rssbNumber"),
    period: str | None = Query(None),
    matricule: str | None = Query(None),
    service: ContributionService = Depends(get_contribution_service),
):
    """Find contributions with an optional single filter."""
    return await service.find(
        rssb_number=validate_rssb_number(rssb_number) if rssb_number else None,
        period=validate_period(period) if period else None,
        matricule=validate_matricule(matricule) if matricule else None,
    )


@router.post(
    "", response_model=ContributionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_contribution(
    body: ContributionCreate,
    service: ContributionService = Depends(get_contribution_service),
):
    return await service.create(body.to_fields())
