"""Resource Store - persistence for the Portfolio and Experience collections.

Invariants:
    - create/update_by_id re-check the record before any SQL runs and persist
      its normalized form (current=True always stores end_date=None)
    - update_by_id is full replacement: every record field is overwritten,
      id and created_at are untouched, updated_at is always bumped
    - get/update/delete on a missing id raise ResourceNotFoundError
      (a second delete of the same id is not-found, never success)
    - list_all on an empty collection returns []
    - Each operation is one session, one transaction, one table

Design Decisions:
    - One generic SQLAlchemy implementation, two thin variants: ordering,
      model class and record check are the only differences between kinds
    - The DatabaseSessionManager is injected, so tests and the app share code
"""

import logging
from collections.abc import Callable
from dataclasses import asdict
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.core.domain_types import (
    ExperienceRecord, PortfolioRecord, ResourceKind, operation_name,
)
from folio.core.errors import ErrorContext, ResourceNotFoundError, ResourceValidationError
from folio.core.validation import (
    ValidationResult, check_experience_record, check_portfolio_record,
)
from folio.db.base import Base
from folio.infrastructure.database import DatabaseSessionManager
from folio.models._columns import utcnow
from folio.models.experience import Experience
from folio.models.portfolio import Portfolio

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", PortfolioRecord, ExperienceRecord)
RowT = TypeVar("RowT", bound=Base)


class SqlResourceStore(Generic[RecordT, RowT]):
    """Generic CRUD over one ORM model."""

    kind: ResourceKind
    model: type[RowT]
    check_record: Callable[[RecordT], ValidationResult]

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    def _order_by(self) -> tuple:
        raise NotImplementedError

    def _context(self, operation: str, resource_id: Any = None) -> ErrorContext:
        return ErrorContext(
            operation=operation_name(self.kind, operation),
            resource_kind=self.kind.value,
            resource_id=str(resource_id) if resource_id is not None else None,
        )

    def _check(self, record: RecordT, operation: str, resource_id: Any = None) -> RecordT:
        result = self.check_record(record)
        if not result.ok:
            raise ResourceValidationError(
                result.errors, context=self._context(operation, resource_id),
            )
        return result.record

    async def _get_or_raise(
        self, db: AsyncSession, resource_id: UUID, operation: str,
    ) -> RowT:
        row = await db.get(self.model, resource_id)
        if row is None:
            raise ResourceNotFoundError(
                self.kind.label, str(resource_id),
                self._context(operation, resource_id),
            )
        return row

    async def create(self, record: RecordT) -> RowT:
        record = self._check(record, "create")
        row = self.model(**asdict(record))
        async with self._db.session() as db:
            db.add(row)
            await db.commit()
            await db.refresh(row)
        logger.info(
            f"{self.kind.label} created",
            extra={"resource_kind": self.kind.value, "resource_id": row.id},
        )
        return row

    async def list_all(self) -> list[RowT]:
        async with self._db.session() as db:
            result = await db.execute(select(self.model).order_by(*self._order_by()))
            return list(result.scalars().all())

    async def get_by_id(self, resource_id: UUID) -> RowT:
        async with self._db.session() as db:
            return await self._get_or_raise(db, resource_id, "get")

    async def update_by_id(self, resource_id: UUID, record: RecordT) -> RowT:
        record = self._check(record, "update", resource_id)
        async with self._db.session() as db:
            row = await self._get_or_raise(db, resource_id, "update")
            for name, value in asdict(record).items():
                setattr(row, name, value)
            row.updated_at = utcnow()
            await db.commit()
            await db.refresh(row)
        logger.info(
            f"{self.kind.label} updated",
            extra={"resource_kind": self.kind.value, "resource_id": resource_id},
        )
        return row

    async def delete_by_id(self, resource_id: UUID) -> bool:
        async with self._db.session() as db:
            row = await self._get_or_raise(db, resource_id, "delete")
            await db.delete(row)
            await db.commit()
        logger.info(
            f"{self.kind.label} deleted",
            extra={"resource_kind": self.kind.value, "resource_id": resource_id},
        )
        return True


class PortfolioStore(SqlResourceStore[PortfolioRecord, Portfolio]):
    """Portfolio projects, newest first."""
    kind = ResourceKind.PORTFOLIO
    model = Portfolio
    check_record = staticmethod(check_portfolio_record)

    def _order_by(self) -> tuple:
        return (Portfolio.created_at.desc(),)


class ExperienceStore(SqlResourceStore[ExperienceRecord, Experience]):
    """Experience entries, most recent role first."""
    kind = ResourceKind.EXPERIENCE
    model = Experience
    check_record = staticmethod(check_experience_record)

    def _order_by(self) -> tuple:
        return (Experience.start_date.desc(), Experience.created_at.desc())
