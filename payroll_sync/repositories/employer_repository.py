"""Employer repository — rows keyed by matricule."""

from sqlalchemy import select

from payroll_sync.core.records import EmployerFields, EmployerRecord
from payroll_sync.models.employer import Employer
from payroll_sync.repositories.base import BaseRepository


class EmployerRepository(BaseRepository):

    async def find_all(self) -> list[EmployerRecord]:
        result = await self._session.execute(
            select(Employer).order_by(Employer.created_at.desc()),
        )
        return [employer_from_row(row) for row in result.scalars().all()]

    async def find_by_matricule(self, matricule: str) -> EmployerRecord | None:
        result = await self._session.execute(
            select(Employer).where(Employer.matricule == matricule),
        )
        row = result.scalar_one_or_none()
        return employer_from_row(row) if row else None

    async def create(self, fields: EmployerFields) -> EmployerRecord:
        row = Employer(name=fields.name, matricule=fields.matricule)
        row = await self._insert(row, "Employer", fields.matricule)
        return employer_from_row(row)


def employer_from_row(row: Employer) -> EmployerRecord:
    return EmployerRecord(
        id=row.id,
        name=row.name,
        matricule=row.matricule,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
