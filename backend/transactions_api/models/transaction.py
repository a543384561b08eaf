"""Transaction ORM - one immutable money transfer between two account references.

Invariants:
    - transaction_id is an integer primary key assigned by the database
    - creation_date is assigned by the database at insert time (server default now())
    - trace_number is UNIQUE; duplicate inserts fail at the storage layer
    - CHECK constraints mirror the validator: account type enumeration,
      account number length 9..12, 0 < amount <= 999999999.99, memo <= 255 chars
    - No update or delete path exists for this table

Design Decisions:
    - NUMERIC(12, 2) for amount: exact cents, returned as Decimal
    - Named constraints: storage error messages identify the failing rule
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, Integer, Numeric, String, UniqueConstraint, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from transactions_api.core.domain_types import (
    AccountType, MAX_ACCOUNT_LENGTH, MAX_AMOUNT, MAX_MEMO_LENGTH, MIN_ACCOUNT_LENGTH,
)
from transactions_api.db.base import Base


_ACCOUNT_TYPES_SQL = ", ".join(f"'{value}'" for value in AccountType.values())


def _account_type_check(column: str) -> CheckConstraint:
    return CheckConstraint(
        f"{column} IN ({_ACCOUNT_TYPES_SQL})", name=f"ck_transactions_{column}",
    )


def _account_number_check(column: str) -> CheckConstraint:
    return CheckConstraint(
        f"length({column}) BETWEEN {MIN_ACCOUNT_LENGTH} AND {MAX_ACCOUNT_LENGTH}",
        name=f"ck_transactions_{column}_length",
    )


class Transaction(Base):
    """Persisted transfer record."""
    __tablename__ = "transactions"
    __table_args__ = (
        UniqueConstraint("trace_number", name="uq_transactions_trace_number"),
        _account_type_check("account_type_from"),
        _account_type_check("account_type_to"),
        _account_number_check("account_number_from"),
        _account_number_check("account_number_to"),
        CheckConstraint(
            f"amount > 0 AND amount <= {MAX_AMOUNT}",
            name="ck_transactions_amount_range",
        ),
        CheckConstraint(
            f"memo IS NULL OR length(memo) <= {MAX_MEMO_LENGTH}",
            name="ck_transactions_memo_length",
        ),
    )

    transaction_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    account_number_from: Mapped[str] = mapped_column(
        String(MAX_ACCOUNT_LENGTH), nullable=False,
    )
    account_type_from: Mapped[str] = mapped_column(String(20), nullable=False)
    account_number_to: Mapped[str] = mapped_column(
        String(MAX_ACCOUNT_LENGTH), nullable=False,
    )
    account_type_to: Mapped[str] = mapped_column(String(20), nullable=False)
    trace_number: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
        index=True,
    )
    memo: Mapped[str | None] = mapped_column(String(MAX_MEMO_LENGTH), nullable=True)
