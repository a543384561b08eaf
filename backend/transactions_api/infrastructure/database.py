"""Database Session Manager - async connection pool with scoped sessions and health checks.

Invariants:
    - One manager per process, created in the app lifespan and passed explicitly
      (app.state -> FastAPI dependency -> store); no module-level singleton
    - Every session rolls back on exception and is always closed (returned to the pool)
    - transaction() commits on clean exit only; partial writes never become visible
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - expire_on_commit=False: returned rows stay readable after commit in async context
    - SQLAlchemy exceptions propagate unchanged; the store decides what they mean
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from transactions_api.db.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if make_url(database_url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self._bind(create_async_engine(database_url, **engine_kwargs))

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "DatabaseSessionManager":
        """Wrap an existing engine (tests, scripts)."""
        manager = cls.__new__(cls)
        manager._bind(engine)
        return manager

    def _bind(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session inside BEGIN ... COMMIT; any exception rolls back."""
        async with self.session() as session:
            async with session.begin():
                yield session

    async def create_schema(self) -> None:
        """Create missing tables from Base.metadata (idempotent, not a migration)."""
        import transactions_api.models  # noqa: F401  populate metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()
