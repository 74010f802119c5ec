"""Oracle Employees — authoritative employee CRUD.

Invariants:
    - GET /{rssbNumber} is a plain lookup: 404 on miss, never syncs
    - POST returns 201; a duplicate rssbNumber returns 409 CONFLICT_ON_INSERT
"""

from fastapi import APIRouter, Depends, status

from payroll_sync.api.dependencies import get_employee_service
from payroll_sync.core.errors import ErrorContext, ResourceNotFoundError
from payroll_sync.core.validation import validate_rssb_number
from payroll_sync.schemas.employee import EmployeeCreate, EmployeeResponse
from payroll_sync.services.master_data import EmployeeService

router = APIRouter(prefix="/api/v1/employees", tags=["employee"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(service: EmployeeService = Depends(get_employee_service)):
    """List all employees."""
    return await service.find_all()


@router.get("/{rssb_number}", response_model=EmployeeResponse)
async def get_employee(
    rssb_number: str, service: EmployeeService = Depends(get_employee_service),
):
    """Find employee by RSSB number."""
    rssb_number = validate_rssb_number(rssb_number)
    employee = await service.find_by_rssb_number(rssb_number)
    if not employee:
        raise ResourceNotFoundError(
            "Employee", rssb_number,
            ErrorContext(rssb_number=rssb_number, operation="get_employee"),
        )
    return employee


@router.post(
    "", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeCreate, service: EmployeeService = Depends(get_employee_service),
):
    """Create an employee."""
    return await service.create(body.to_fields())
