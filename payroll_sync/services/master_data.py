"""Oracle Master Data — authoritative CRUD over employees, employers and contributions.

Invariants:
    - Business-key lookups return None on miss; routes turn that into 404
    - No auto-sync on this side: oracle is the source of truth
    - Duplicate business keys surface as ConflictOnInsertError (409), never as a raw
      constraint violation
    - Contribution filters: exactly one of rssb_number > period > matricule is applied
      (first non-empty wins), none → full listing

Design Decisions:
    - Contributions reference employees/employers by string key only; no
      existence check (loose coupling kept)
"""

import logging

from payroll_sync.core.domain_types import ContributionFilterField
from payroll_sync.core.ports import ContributionStore, EmployeeStore, EmployerStore
from payroll_sync.core.records import (
    ContributionFields,
    ContributionRecord,
    EmployeeFields,
    EmployeeRecord,
    EmployerFields,
    EmployerRecord,
)

logger = logging.getLogger(__name__)


class EmployeeService:

    def __init__(self, store: EmployeeStore):
        self._store = store

    async def find_all(self) -> list[EmployeeRecord]:
        return await self._store.find_all()

    async def find_by_rssb_number(self, rssb_number: str) -> EmployeeRecord | None:
        return await self._store.find_by_rssb_number(rssb_number)

    async def create(self, fields: EmployeeFields) -> EmployeeRecord:
        employee = await self._store.create(fields)
        logger.info(
            f"Created employee {employee.id} with RSSB {employee.rssb_number}",
            extra={"rssb_number": employee.rssb_number, "operation": "create_employee"},
        )
        return employee


class EmployerService:

    def __init__(self, store: EmployerStore):
        self._store = store

    async def find_all(self) -> list[EmployerRecord]:
        return await self._store.find_all()

    async def find_by_matricule(self, matricule: str) -> EmployerRecord | None:
        return await self._store.find_by_matricule(matricule)

    async def create(self, fields: EmployerFields) -> EmployerRecord:
        employer = await self._store.create(fields)
        logger.info(
            f"Created employer {employer.id} with matricule {employer.matricule}",
            extra={"operation": "create_employer"},
        )
        return employer


class ContributionService:

    def __init__(self, store: ContributionStore):
        self._store = store

    async def find(
        self,
        rssb_number: str | None = None,
        period: str | None = None,
        matricule: str | None = None,
    ) -> list[ContributionRecord]:
        if rssb_number:
            return await self._store.find(ContributionFilterField.RSSB_NUMBER, rssb_number)
        if period:
            return await self._store.find(ContributionFilterField.PERIOD, period)
        if matricule:
            return await self._store.find(ContributionFilterField.MATRICULE, matricule)
        return await self._store.find()

    async def create(self, fields: ContributionFields) -> ContributionRecord:
        contribution = await self._store.create(fields)
        logger.info(
            f"Created contribution {contribution.id} for employee "
            f"{contribution.rssb_number}",
            extra={
                "rssb_number": contribution.rssb_number,
                "operation": "create_contribution",
            },
        )
        return contribution
