"""Error Handlers - global exception handlers rendering the error envelope.

Invariants:
    - TransactionApiError -> its own http_status and to_response() body
    - Starlette HTTPException (404, 405, ...) -> same envelope with exc.detail as message
    - Exception (catch-all) -> 500 "An unexpected error occurred", never leaks internals
    - 500-level errors are logged with full detail; clients only see public messages
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from transactions_api.api.responses import error_response
from transactions_api.core.errors import TransactionApiError

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(TransactionApiError)
    async def transaction_error_handler(request: Request, exc: TransactionApiError):
        """Handle all domain/infrastructure errors raised by handlers and the store."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "trace_number": exc.context.trace_number,
        }
        if exc.http_status >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{exc.code}: {exc.message}", extra=extra, exc_info=exc)
        else:
            logger.warning(f"{exc.code}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.info(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )
        response = error_response(str(exc.detail), exc.status_code)
        if exc.headers:
            response.headers.update(exc.headers)
        return response


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "method": request.method},
            exc_info=True,
        )
        return error_response(
            UNEXPECTED_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
