"""Employee Schemas — create payload and public representation."""

from datetime import date, datetime

from pydantic import ValidationInfo, field_validator

from payroll_sync.core.records import EmployeeFields
from payroll_sync.core.validation import validate_name, validate_rssb_number
from payroll_sync.schemas.base import RequestModel, ResponseModel, check


class EmployeeCreate(RequestModel):
    firstname: str
    lastname: str
    rssb_number: str
    dob: date

    @field_validator("firstname", "lastname")
    @classmethod
    def validate_names(cls, v: str, info: ValidationInfo) -> str:
        return check(validate_name, v, info.field_name)

    @field_validator("rssb_number")
    @classmethod
    def validate_key(cls, v: str) -> str:
        return check(validate_rssb_number, v)

    @field_validator("dob")
    @classmethod
    def dob_not_in_future(cls, v: date) -> date:
        if v > date.today():
            raise ValueError("dob cannot be in the future")
        return v

    def to_fields(self) -> EmployeeFields:
        return EmployeeFields(
            firstname=self.firstname,
            lastname=self.lastname,
            rssb_number=self.rssb_number,
            dob=self.dob,
        )


class EmployeeResponse(ResponseModel):
    id: str
    firstname: str
    lastname: str
    rssb_number: str
    dob: date
    created_at: datetime | None = None
    updated_at: datetime | None = None
