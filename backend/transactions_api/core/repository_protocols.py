"""Boundary Protocols - contract between the request handlers and persistence.

Invariants:
    - Handlers depend on TransactionRepository, never on a concrete store
    - create() returns the camelCase record or raises a TransactionApiError subclass
    - list() returns a TransactionPage whose total ignores limit/offset

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol

from transactions_api.core.domain_types import TransactionPage
from transactions_api.schemas.transaction import TransactionCreate, TransactionFilters


class TransactionRepository(Protocol):
    """Contract for transaction persistence - implemented by infrastructure."""
    async def create(self, record: TransactionCreate) -> dict: ...
    async def list(
        self, filters: TransactionFilters, limit: int, offset: int,
    ) -> TransactionPage: ...
