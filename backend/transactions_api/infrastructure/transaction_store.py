"""Transaction Store - all persistence for the Transaction entity.

Invariants:
    - create() runs in exactly one unit of work: INSERT ... RETURNING, then COMMIT
    - create() commits only when the insert returned exactly one row
    - Any failure rolls back before a domain error is raised; no partial row is visible
    - list() total uses the same predicates as the page query and ignores limit/offset
    - Rows leave the store only through COLUMN_TO_FIELD (snake_case -> camelCase)
    - Public contract exposes only TransactionApiError subclasses, never driver errors

Design Decisions:
    - Manager injected at construction; each operation acquires and releases its own session
    - end_date is inclusive of the whole day: creation_date < end_date + 1 day
    - list() is not transactional: count and page may see different snapshots
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Mapping

from sqlalchemy import func, insert, select
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

from transactions_api.core.domain_types import TransactionPage
from transactions_api.core.errors import (
    ConstraintViolationError,
    DuplicateTraceNumberError,
    ErrorContext,
    PersistenceFailureError,
    StoreInvariantError,
)
from transactions_api.infrastructure.database import DatabaseSessionManager
from transactions_api.infrastructure.storage_errors import (
    StorageErrorKind, classify_storage_error,
)
from transactions_api.models.transaction import Transaction
from transactions_api.schemas.transaction import TransactionCreate, TransactionFilters

logger = logging.getLogger(__name__)

COLUMN_TO_FIELD: dict[str, str] = {
    "transaction_id": "transactionID",
    "account_number_from": "accountNumberFrom",
    "account_type_from": "accountTypeFrom",
    "account_number_to": "accountNumberTo",
    "account_type_to": "accountTypeTo",
    "trace_number": "traceNumber",
    "amount": "amount",
    "creation_date": "creationDate",
    "memo": "memo",
}

_table = Transaction.__table__
_COLUMNS = [_table.c[name] for name in COLUMN_TO_FIELD]


def to_external(row: Mapping[str, Any]) -> dict[str, Any]:
    """Rename a storage row to the camelCase API contract."""
    return {field: row[column] for column, field in COLUMN_TO_FIELD.items()}


class TransactionStore:
    """Create and list transactions against the injected database manager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, record: TransactionCreate) -> dict:
        """Insert one transaction and return the persisted record."""
        context = ErrorContext(trace_number=record.trace_number)
        stmt = insert(_table).values(**record.to_row()).returning(*_COLUMNS)
        try:
            async with self._db.transaction() as session:
                result = await session.execute(stmt)
                rows = result.mappings().all()
                if len(rows) != 1:
                    raise StoreInvariantError(
                        f"Failed to create transaction: insert returned {len(rows)} rows",
                        context,
                    )
                created = to_external(rows[0])
        except IntegrityError as e:
            raise self._translate_write_error(e, context) from e
        except DBAPIError as e:
            logger.error(
                f"DB driver error in create transaction: {e}",
                extra={"trace_number": record.trace_number},
            )
            raise PersistenceFailureError(str(e.orig), "insert", context) from e
        except SQLAlchemyError as e:
            logger.error(
                f"SQLAlchemy error in create transaction: {e}",
                extra={"trace_number": record.trace_number},
            )
            raise PersistenceFailureError(str(e), "insert", context) from e

        logger.info(
            "Transaction created",
            extra={
                "transaction_id": created["transactionID"],
                "trace_number": created["traceNumber"],
            },
        )
        return created

    async def list(
        self, filters: TransactionFilters, limit: int, offset: int,
    ) -> TransactionPage:
        """One page of transactions, newest first, plus the filtered total."""
        conditions = date_conditions(filters)
        count_stmt = select(func.count()).select_from(_table).where(*conditions)
        page_stmt = (
            select(*_COLUMNS)
            .where(*conditions)
            .order_by(_table.c.creation_date.desc())
            .limit(limit)
            .offset(offset)
        )
        try:
            async with self._db.session() as session:
                total = (await session.execute(count_stmt)).scalar_one()
                rows = (await session.execute(page_stmt)).mappings().all()
        except SQLAlchemyError as e:
            logger.error(f"Database error in list transactions: {e}")
            raise PersistenceFailureError(str(e), "select") from e

        logger.debug(
            f"Found {len(rows)} transactions",
            extra={"total": total, "limit": limit, "offset": offset},
        )
        return TransactionPage(items=[to_external(row) for row in rows], total=total)

    def _translate_write_error(
        self, exc: IntegrityError, context: ErrorContext,
    ) -> Exception:
        kind = classify_storage_error(exc)
        logger.warning(
            f"Integrity error in create transaction ({kind.value}): {exc.orig}",
            extra={"trace_number": context.trace_number},
        )
        if kind is StorageErrorKind.UNIQUE_VIOLATION:
            return DuplicateTraceNumberError(context)
        if kind is StorageErrorKind.CHECK_VIOLATION:
            return ConstraintViolationError(context)
        return PersistenceFailureError(str(exc.orig), "insert", context)


def date_conditions(filters: TransactionFilters) -> list:
    """WHERE clauses for the inclusive creation-date range."""
    conditions = []
    if filters.start_date is not None:
        conditions.append(_table.c.creation_date >= _day_start(filters.start_date))
    if filters.end_date is not None:
        conditions.append(
            _table.c.creation_date < _day_start(filters.end_date + timedelta(days=1)),
        )
    return conditions


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)
