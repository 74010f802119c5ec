"""imisanzu Employees — local mirror with read-repair from oracle.

Invariants:
    - GET /{rssbNumber} answers 200 for FOUND and SYNCED, 404 for NOT_FOUND and
      SYNC_FAILED — a failed sync is never a 500
"""

from fastapi import APIRouter, Depends

from payroll_sync.api.dependencies import get_employee_sync_service
from payroll_sync.core.errors import ErrorContext, ResourceNotFoundError
from payroll_sync.core.validation import validate_rssb_number
from payroll_sync.schemas.employee import EmployeeResponse
from payroll_sync.services.employee_sync import EmployeeSyncService

router = APIRouter(prefix="/api/v1/employees", tags=["employee"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    service: EmployeeSyncService = Depends(get_employee_sync_service),
):
    """List employees mirrored locally (newest first)."""
    return await service.list_employees()


@router.get("/{rssb_number}", response_model=EmployeeResponse)
async def get_employee(
    rssb_number: str,
    service: EmployeeSyncService = Depends(get_employee_sync_service),
):
    """Find employee by RSSB number, syncing from oracle when missing locally."""
    rssb_number = validate_rssb_number(rssb_number)
    lookup = await service.resolve_employee(rssb_number)
    if not lookup.found:
        raise ResourceNotFoundError(
            "Employee", rssb_number,
            ErrorContext(
                rssb_number=rssb_number,
                operation="resolve_employee",
                debug_info={"lookup_status": lookup.status.value},
            ),
        )
    return lookup.employee
