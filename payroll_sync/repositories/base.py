"""Shared helpers for the master-store repositories."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_sync.core.errors import ConflictOnInsertError, ErrorContext
from payroll_sync.db.base import Base

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base repository holding the request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _insert(self, row: Base, resource_type: str, business_key: str):
        """Add, commit and refresh ``row``; duplicate keys become ConflictOnInsertError."""
        self._session.add(row)
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(
                f"Duplicate {resource_type} insert rejected: {business_key}",
                extra={"operation": f"create_{resource_type.lower()}"},
            )
            raise ConflictOnInsertError(
                resource_type, business_key,
                ErrorContext(
                    operation=f"create_{resource_type.lower()}",
                    debug_info={"constraint": str(e.orig)},
                ),
            ) from e
        await self._session.refresh(row)
        return row
