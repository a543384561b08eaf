"""Root conftest - shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the full schema
    - app.state.db_manager points at the test database for the client's lifetime
    - Environment is set before the application module is imported
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("DATABASE_CREATE_SCHEMA", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

import transactions_api.models  # noqa: E402,F401
from transactions_api.db.base import Base  # noqa: E402
from transactions_api.infrastructure.database import DatabaseSessionManager  # noqa: E402
from transactions_api.infrastructure.transaction_store import TransactionStore  # noqa: E402
from transactions_api.main import app  # noqa: E402
from transactions_api.models.transaction import Transaction  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
def store(db_manager):
    return TransactionStore(db_manager)


@pytest.fixture
async def client(db_manager):
    """FastAPI test client wired to the test database."""
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db_manager = original_manager


@pytest.fixture
def seed_transactions(db_manager):
    """Insert rows with explicit creation dates. Returns the trace numbers in insert order."""

    async def _seed(creation_dates: list[datetime]) -> list[str]:
        traces = []
        async with db_manager.transaction() as session:
            for i, created in enumerate(creation_dates):
                trace = f"{i:032x}"
                session.add(Transaction(
                    account_number_from="123456789",
                    account_type_from="CHECKING",
                    account_number_to="987654321",
                    account_type_to="SAVINGS",
                    trace_number=trace,
                    amount=Decimal("10.00") + i,
                    creation_date=created,
                    memo=f"seed {i}",
                ))
                traces.append(trace)
        return traces

    return _seed


@pytest.fixture
def count_rows(db_manager):
    async def _count() -> int:
        async with db_manager.session() as session:
            return (
                await session.execute(select(func.count()).select_from(Transaction))
            ).scalar_one()

    return _count
