"""Employee Read-Repair Sync — local lookup first, oracle fetch and persist on miss.

Invariants:
    - Local hit never calls oracle
    - Local miss + oracle hit → exactly one create; later lookups are local hits
    - Oracle failure never raises: it becomes SYNC_FAILED (or NOT_FOUND on 404)
      and nothing is written locally
    - Oracle payload whose rssbNumber differs from the requested key is rejected
    - Duplicate-insert race resolved by re-reading the winner's row
    - Local-store errors propagate unchanged

Design Decisions:
    - Typed EmployeeLookup instead of Optional: callers and tests can tell
      "absent everywhere" from "oracle unreachable"
    - No locking around the sequence: the unique rssb_number constraint is the guard
"""

import logging
from dataclasses import dataclass

from payroll_sync.core.domain_types import EmployeeLookupStatus
from payroll_sync.core.errors import (
    ConflictOnInsertError,
    DecodeFailureError,
    ErrorContext,
    UpstreamUnavailableError,
)
from payroll_sync.core.ports import EmployeeStore, MasterDataSource
from payroll_sync.core.records import EmployeeFields, EmployeeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeLookup:
    """Result of resolve_employee()."""
    status: EmployeeLookupStatus
    employee: EmployeeRecord | None = None
    error: UpstreamUnavailableError | None = None

    @property
    def found(self) -> bool:
        return self.employee is not None


class EmployeeSyncService:
    """Resolves employees against the local store, repairing misses from oracle."""

    def __init__(self, store: EmployeeStore, source: MasterDataSource):
        self._store = store
        self._source = source

    async def list_employees(self) -> list[EmployeeRecord]:
        return await self._store.find_all()

    async def resolve_employee(self, rssb_number: str) -> EmployeeLookup:
        log_extra = {"rssb_number": rssb_number, "operation": "resolve_employee"}

        employee = await self._store.find_by_rssb_number(rssb_number)
        if employee:
            logger.info(f"Found employee {rssb_number} locally", extra=log_extra)
            return EmployeeLookup(EmployeeLookupStatus.FOUND, employee)

        logger.info(
            f"Employee {rssb_number} not found locally, syncing from oracle",
            extra=log_extra,
        )
        try:
            remote = await self._fetch_remote(rssb_number)
        except UpstreamUnavailableError as e:
            return self._sync_failure(rssb_number, e, log_extra)

        try:
            employee = await self._store.create(EmployeeFields(
                id=remote.id,
                firstname=remote.firstname,
                lastname=remote.lastname,
                rssb_number=remote.rssb_number,
                dob=remote.dob,
            ))
        except ConflictOnInsertError:
            return await self._reread_after_conflict(rssb_number, log_extra)

        logger.info(f"Synced employee {rssb_number} from oracle", extra=log_extra)
        return EmployeeLookup(EmployeeLookupStatus.SYNCED, employee)

    async def _fetch_remote(self, rssb_number: str) -> EmployeeRecord:
        remote = await self._source.get_employee(rssb_number)
        if remote.rssb_number != rssb_number:
            raise DecodeFailureError(
                f"requested '{rssb_number}' but oracle returned "
                f"'{remote.rssb_number}'",
                ErrorContext(rssb_number=rssb_number, operation="get_employee"),
            )
        return remote

    async def _reread_after_conflict(
        self, rssb_number: str, log_extra: dict,
    ) -> EmployeeLookup:
        """A concurrent lookup inserted first; serve its row."""
        employee = await self._store.find_by_rssb_number(rssb_number)
        if employee is None:
            # conflict on another key (e.g. id), not a race we can resolve
            raise ConflictOnInsertError(
                "Employee", rssb_number,
                ErrorContext(rssb_number=rssb_number, operation="resolve_employee"),
            )
        logger.warning(
            f"Concurrent sync for employee {rssb_number}, using existing row",
            extra=log_extra,
        )
        return EmployeeLookup(EmployeeLookupStatus.FOUND, employee)

    @staticmethod
    def _sync_failure(
        rssb_number: str, error: UpstreamUnavailableError, log_extra: dict,
    ) -> EmployeeLookup:
        if error.is_not_found:
            logger.info(
                f"Employee {rssb_number} not found in oracle", extra=log_extra,
            )
            return EmployeeLookup(EmployeeLookupStatus.NOT_FOUND, error=error)
        logger.error(
            f"Failed to sync employee {rssb_number} from oracle: {error.message}",
            extra={
                **log_extra,
                "error_code": error.code,
                "upstream_kind": error.kind.value,
                "status_code": error.status_code,
            },
        )
        return EmployeeLookup(EmployeeLookupStatus.SYNC_FAILED, error=error)
