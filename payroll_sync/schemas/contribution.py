"""Contribution Schemas — create payload, public representation and cache statistics.

Invariants:
    - amount accepted as JSON number or string, stored and emitted as a 2-decimal string
    - period is YYYY-MM
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from payroll_sync.core.records import ContributionFields
from payroll_sync.core.validation import (
    validate_amount,
    validate_matricule,
    validate_period,
    validate_rssb_number,
)
from payroll_sync.schemas.base import RequestModel, ResponseModel, check


class ContributionCreate(RequestModel):
    period: str
    rssb_number: str
    matricule: str
    amount: Decimal

    @field_validator("period")
    @classmethod
    def validate_month(cls, v: str) -> str:
        return check(validate_period, v)

    @field_validator("rssb_number")
    @classmethod
    def validate_employee_key(cls, v: str) -> str:
        return check(validate_rssb_number, v)

    @field_validator("matricule")
    @classmethod
    def validate_employer_key(cls, v: str) -> str:
        return check(validate_matricule, v)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_money(cls, v) -> Decimal:
        if isinstance(v, bool):
            raise ValueError("amount must be a number")
        return check(validate_amount, v)

    def to_fields(self) -> ContributionFields:
        return ContributionFields(
            period=self.period,
            rssb_number=self.rssb_number,
            matricule=self.matricule,
            amount=self.amount,
        )


class ContributionResponse(ResponseModel):
    id: str
    period: str
    rssb_number: str
    matricule: str
    amount: Decimal
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CacheStatsResponse(ResponseModel):
    """Contribution cache monitoring snapshot."""
    hit: int = Field(description="Cache hits since process start")
    miss: int = Field(description="Cache misses since process start")
    keys: int = Field(description="Resident contributions:* keys (SCAN estimate)")
    hit_rate: float = Field(description="Hits as a percentage of lookups")
