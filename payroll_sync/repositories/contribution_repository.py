"""Contribution repository — filtered listings and inserts.

Invariants:
    - find() applies at most one filter field
    - Ordering: by rssb_number or matricule → period desc; by period → created_at desc;
      unfiltered → period desc then created_at desc
    - created_at desc is always the final tie-breaker so listings are stable
"""

from decimal import Decimal

from sqlalchemy import select

from payroll_sync.core.domain_types import ContributionFilterField
from payroll_sync.core.records import CENTS, ContributionFields, ContributionRecord
from payroll_sync.models.contribution import Contribution
from payroll_sync.repositories.base import BaseRepository

_FILTER_COLUMNS = {
    ContributionFilterField.RSSB_NUMBER: Contribution.rssb_number,
    ContributionFilterField.PERIOD: Contribution.period,
    ContributionFilterField.MATRICULE: Contribution.matricule,
}


class ContributionRepository(BaseRepository):

    async def find(
        self,
        field: ContributionFilterField | None = None,
        value: str | None = None,
    ) -> list[ContributionRecord]:
        query = select(Contribution)
        if field is not None:
            query = query.where(_FILTER_COLUMNS[field] == value)
        if field == ContributionFilterField.PERIOD:
            query = query.order_by(Contribution.created_at.desc())
        else:
            query = query.order_by(
                Contribution.period.desc(), Contribution.created_at.desc(),
            )
        result = await self._session.execute(query)
        return [contribution_from_row(row) for row in result.scalars().all()]

    async def create(self, fields: ContributionFields) -> ContributionRecord:
        row = Contribution(
            period=fields.period,
            rssb_number=fields.rssb_number,
            matricule=fields.matricule,
            amount=fields.amount,
        )
        row = await self._insert(
            row, "Contribution",
            f"{fields.rssb_number}/{fields.matricule}/{fields.period}",
        )
        return contribution_from_row(row)


def contribution_from_row(row: Contribution) -> ContributionRecord:
    amount = row.amount
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return ContributionRecord(
        id=row.id,
        period=row.period,
        rssb_number=row.rssb_number,
        matricule=row.matricule,
        amount=amount.quantize(CENTS),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
