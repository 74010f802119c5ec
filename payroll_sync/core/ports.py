"""Capability Ports — the interfaces the read-repair cache core calls through.

Invariants:
    - Services depend on these Protocols, never on SQLAlchemy, httpx or redis directly
    - Store create() raises ConflictOnInsertError on a duplicate business key
    - MasterDataSource raises UpstreamUnavailableError (or DecodeFailureError) on failure
    - CacheStore raises CacheUnavailableError on backend failure; get() returns None on miss

Design Decisions:
    - typing.Protocol (structural) over ABCs: test doubles need no inheritance
"""

from typing import Protocol

from payroll_sync.core.domain_types import ContributionFilterField
from payroll_sync.core.records import (
    ContributionFields,
    ContributionRecord,
    EmployeeFields,
    EmployeeRecord,
    EmployerFields,
    EmployerRecord,
)


class EmployeeStore(Protocol):
    async def find_all(self) -> list[EmployeeRecord]: ...

    async def find_by_rssb_number(self, rssb_number: str) -> EmployeeRecord | None: ...

    async def create(self, fields: EmployeeFields) -> EmployeeRecord: ...


class EmployerStore(Protocol):
    async def find_all(self) -> list[EmployerRecord]: ...

    async def find_by_matricule(self, matricule: str) -> EmployerRecord | None: ...

    async def create(self, fields: EmployerFields) -> EmployerRecord: ...


class ContributionStore(Protocol):
    async def find(
        self,
        field: ContributionFilterField | None = None,
        value: str | None = None,
    ) -> list[ContributionRecord]: ...

    async def create(self, fields: ContributionFields) -> ContributionRecord: ...


class MasterDataSource(Protocol):
    async def get_employee(self, rssb_number: str) -> EmployeeRecord: ...

    async def get_contributions(self, rssb_number: str) -> list[ContributionRecord]: ...


class CacheStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def count_keys(self, pattern: str) -> int: ...
