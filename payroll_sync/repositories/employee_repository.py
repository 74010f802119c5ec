"""Employee repository — rows keyed by RSSB number."""

from sqlalchemy import select

from payroll_sync.core.records import EmployeeFields, EmployeeRecord
from payroll_sync.models.employee import Employee
from payroll_sync.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository):

    async def find_all(self) -> list[EmployeeRecord]:
        result = await self._session.execute(
            select(Employee).order_by(Employee.created_at.desc()),
        )
        return [employee_from_row(row) for row in result.scalars().all()]

    async def find_by_rssb_number(self, rssb_number: str) -> EmployeeRecord | None:
        result = await self._session.execute(
            select(Employee).where(Employee.rssb_number == rssb_number),
        )
        row = result.scalar_one_or_none()
        return employee_from_row(row) if row else None

    async def create(self, fields: EmployeeFields) -> EmployeeRecord:
        row = employee_to_row(fields)
        row = await self._insert(row, "Employee", fields.rssb_number)
        return employee_from_row(row)


def employee_to_row(fields: EmployeeFields) -> Employee:
    row = Employee(
        firstname=fields.firstname,
        lastname=fields.lastname,
        rssb_number=fields.rssb_number,
        dob=fields.dob,
    )
    if fields.id:
        row.id = fields.id
    return row


def employee_from_row(row: Employee) -> EmployeeRecord:
    return EmployeeRecord(
        id=row.id,
        firstname=row.firstname,
        lastname=row.lastname,
        rssb_number=row.rssb_number,
        dob=row.dob,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
