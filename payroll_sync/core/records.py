"""Domain Records — immutable snapshots of Employees, Employers and Contributions.

Invariants:
    - Records are frozen dataclasses; nothing mutates a record after construction
    - Wire format is camelCase (rssbNumber, createdAt) and shared by the oracle API,
      the imisanzu API and the contribution cache payload
    - amount travels as a decimal string ("4000000.00"), never a float
    - *_from_wire raises DecodeFailureError on any malformed payload
    - Decoded amounts are quantized to cents whatever form the sender used

Design Decisions:
    - Explicit to_wire/from_wire functions over reflection-driven serializers:
      the cache payload format is visible in one place
    - Date/datetime coercion accepts both ISO dates and ISO timestamps because
      oracle historically serialized dob as a timestamp
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from payroll_sync.core.errors import DecodeFailureError

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class EmployeeRecord:
    id: str
    firstname: str
    lastname: str
    rssb_number: str
    dob: date
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class EmployerRecord:
    id: str
    name: str
    matricule: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ContributionRecord:
    id: str
    period: str
    rssb_number: str
    matricule: str
    amount: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ─── Create payloads ────────────────────────────────────────────

@dataclass(frozen=True)
class EmployeeFields:
    """Fields accepted by EmployeeStore.create. id=None lets the store generate one."""
    firstname: str
    lastname: str
    rssb_number: str
    dob: date
    id: str | None = None


@dataclass(frozen=True)
class EmployerFields:
    name: str
    matricule: str


@dataclass(frozen=True)
class ContributionFields:
    period: str
    rssb_number: str
    matricule: str
    amount: Decimal


# ─── Wire mapping ───────────────────────────────────────────────

def employee_to_wire(record: EmployeeRecord) -> dict:
    return {
        "id": record.id,
        "firstname": record.firstname,
        "lastname": record.lastname,
        "rssbNumber": record.rssb_number,
        "dob": record.dob.isoformat(),
        "createdAt": _format_datetime(record.created_at),
        "updatedAt": _format_datetime(record.updated_at),
    }


def employee_from_wire(payload: Any) -> EmployeeRecord:
    data = _require_object(payload, "employee")
    return EmployeeRecord(
        id=_require_str(data, "id"),
        firstname=_require_str(data, "firstname"),
        lastname=_require_str(data, "lastname"),
        rssb_number=_require_str(data, "rssbNumber"),
        dob=_parse_date(data.get("dob"), "dob"),
        created_at=_parse_optional_datetime(data.get("createdAt"), "createdAt"),
        updated_at=_parse_optional_datetime(data.get("updatedAt"), "updatedAt"),
    )


def employer_to_wire(record: EmployerRecord) -> dict:
    return {
        "id": record.id,
        "name": record.name,
        "matricule": record.matricule,
        "createdAt": _format_datetime(record.created_at),
        "updatedAt": _format_datetime(record.updated_at),
    }


def contribution_to_wire(record: ContributionRecord) -> dict:
    return {
        "id": record.id,
        "period": record.period,
        "rssbNumber": record.rssb_number,
        "matricule": record.matricule,
        "amount": str(record.amount),
        "createdAt": _format_datetime(record.created_at),
        "updatedAt": _format_datetime(record.updated_at),
    }


def contribution_from_wire(payload: Any) -> ContributionRecord:
    data = _require_object(payload, "contribution")
    return ContributionRecord(
        id=_require_str(data, "id"),
        period=_require_str(data, "period"),
        rssb_number=_require_str(data, "rssbNumber"),
        matricule=_require_str(data, "matricule"),
        amount=_parse_decimal(data.get("amount"), "amount"),
        created_at=_parse_optional_datetime(data.get("createdAt"), "createdAt"),
        updated_at=_parse_optional_datetime(data.get("updatedAt"), "updatedAt"),
    )


def contributions_from_wire(payload: Any) -> list[ContributionRecord]:
    """Decode a JSON array of contributions, preserving order."""
    if not isinstance(payload, list):
        raise DecodeFailureError(
            f"expected a list of contributions, got {type(payload).__name__}",
        )
    return [contribution_from_wire(item) for item in payload]


# ─── Coercion helpers ───────────────────────────────────────────

def _require_object(payload: Any, what: str) -> dict:
    if not isinstance(payload, dict):
        raise DecodeFailureError(
            f"expected {what} object, got {type(payload).__name__}",
        )
    return payload


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise DecodeFailureError(f"missing or invalid field '{key}'")
    return value


def _parse_date(value: Any, key: str) -> date:
    if not isinstance(value, str) or len(value) < 10:
        raise DecodeFailureError(f"missing or invalid date '{key}'")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise DecodeFailureError(f"invalid date '{key}': {value}") from e


def _parse_optional_datetime(value: Any, key: str) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeFailureError(f"invalid timestamp '{key}'")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise DecodeFailureError(f"invalid timestamp '{key}': {value}") from e


def _parse_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise DecodeFailureError(f"missing or invalid decimal '{key}'")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise DecodeFailureError(f"invalid decimal '{key}': {value}") from e
    if not amount.is_finite():
        raise DecodeFailureError(f"invalid decimal '{key}': {value}")
    try:
        return amount.quantize(CENTS)
    except InvalidOperation as e:
        raise DecodeFailureError(f"invalid decimal '{key}': {value}") from e


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
