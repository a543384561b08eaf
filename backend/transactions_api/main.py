"""Transactions API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TransactionApiError -> {"status": "error", ...} responses
    - CORS configured from settings (any origin by default)
    - Database manager created on startup via lifespan, stored on app.state, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: cleaner cleanup
    - create_app() factory so tests and scripts can build isolated instances
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transactions_api.api.error_handlers import register_error_handlers
from transactions_api.api.routes import health, transactions
from transactions_api.config import get_settings
from transactions_api.infrastructure.database import DatabaseSessionManager
from transactions_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = [
    "X-Requested-With", "Content-Type", "Accept", "Origin", "Authorization",
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    app.state.db_manager = manager
    logger.info("Transactions API started")
    yield
    logger.info("Transactions API shutting down")
    app.state.db_manager = None
    await manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title, version=settings.api_version, lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
    )
    app.include_router(health.router)
    app.include_router(transactions.router)
    register_error_handlers(app)
    return app


app = create_app()
