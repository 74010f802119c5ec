"""Oracle Employers — authoritative employer CRUD."""

from fastapi import APIRouter, Depends, status

from payroll_sync.api.dependencies import get_employer_service
from payroll_sync.core.errors import ErrorContext, ResourceNotFoundError
from payroll_sync.core.validation import validate_matricule
from payroll_sync.schemas.employer import EmployerCreate, EmployerResponse
from payroll_sync.services.master_data import EmployerService

router = APIRouter(prefix="/api/v1/employers", tags=["employer"])


@router.get("", response_model=list[EmployerResponse])
async def list_employers(service: EmployerService = Depends(get_employer_service)):
    return await service.find_all()


@router.get("/{matricule}", response_model=EmployerResponse)
async def get_employer(
    matricule: str, service: EmployerService = Depends(get_employer_service),
):
    matricule = validate_matricule(matricule)
    employer = await service.find_by_matricule(matricule)
    if not employer:
        raise ResourceNotFoundError(
            "Employer", matricule, ErrorContext(operation="get_employer"),
        )
    return employer


@router.post(
    "", response_model=EmployerResponse, status_code=status.HTTP_201_CREATED,
)
async def create_employer(
    body: EmployerCreate, service: EmployerService = Depends(get_employer_service),
):
    return await service.create(body.to_fields())
