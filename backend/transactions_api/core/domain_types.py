"""Domain Types - enums, limits and value types shared across the codebase.

Invariants:
    - AccountType is the single source of truth for valid account categories
    - MAX_AMOUNT is a Decimal; money is never compared as float
    - Trace numbers are 32 lowercase hex chars (uuid4 without hyphens)
"""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TransactionId = NewType("TransactionId", int)
TraceNumber = NewType("TraceNumber", str)


# ─── Limits ──────────────────────────────────────────────────────

MIN_ACCOUNT_LENGTH: int = 9
MAX_ACCOUNT_LENGTH: int = 12
MAX_AMOUNT: Decimal = Decimal("999999999.99")
AMOUNT_DECIMAL_PLACES: int = 2
MAX_MEMO_LENGTH: int = 255
DATE_FORMAT: str = "%Y-%m-%d"

DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100


# ─── Enums ───────────────────────────────────────────────────────

class AccountType(str, Enum):
    """Account categories accepted on either side of a transfer."""
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT = "CREDIT"
    INVESTMENT = "INVESTMENT"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class TransactionPage:
    """One page of transactions plus the unpaginated filtered count."""
    items: list[dict] = field(default_factory=list)
    total: int = 0


def generate_trace_number() -> TraceNumber:
    """Fresh correlation token: uuid4 hex, no separators."""
    return TraceNumber(uuid.uuid4().hex)
