"""Contribution ORM — monthly amount paid for an employee by an employer.

Invariants:
    - amount is NUMERIC(12, 2) mapped to Decimal (no float rounding drift)
    - No uniqueness across (rssb_number, matricule, period): duplicates may coexist
    - rssb_number and matricule are plain strings, not foreign keys

Design Decisions:
    - Loose coupling kept: oracle accepts contributions for employees/employers
      registered later
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_sync.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Contribution(Base):
    __tablename__ = "contribution"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    period: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    rssb_number: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    matricule: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2, asdecimal=True), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
