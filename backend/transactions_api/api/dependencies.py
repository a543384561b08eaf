"""Dependency Wiring - hands the process-wide session manager to request handlers.

Invariants:
    - The DatabaseSessionManager lives on app.state (set by the lifespan), never in a module global
    - A fresh TransactionStore wraps the shared manager per request
"""

from fastapi import Depends, Request

from transactions_api.core.repository_protocols import TransactionRepository
from transactions_api.infrastructure.database import DatabaseSessionManager
from transactions_api.infrastructure.transaction_store import TransactionStore


def get_db_manager(request: Request) -> DatabaseSessionManager:
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


def get_transaction_store(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> TransactionRepository:
    return TransactionStore(db)
