"""Employer Schemas — create payload and public representation."""

from datetime import datetime

from pydantic import field_validator

from payroll_sync.core.records import EmployerFields
from payroll_sync.core.validation import validate_matricule, validate_name
from payroll_sync.schemas.base import RequestModel, ResponseModel, check


class EmployerCreate(RequestModel):
    name: str
    matricule: str

    @field_validator("name")
    @classmethod
    def validate_company_name(cls, v: str) -> str:
        return check(validate_name, v, "name")

    @field_validator("matricule")
    @classmethod
    def validate_key(cls, v: str) -> str:
        return check(validate_matricule, v)

    def to_fields(self) -> EmployerFields:
        return EmployerFields(name=self.name, matricule=self.matricule)


class EmployerResponse(ResponseModel):
    id: str
    name: str
    matricule: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
