"""Transaction Routes - create and list money transfer records.

Invariants:
    - Payloads are read untyped and checked by core validators before anything else
    - traceNumber is generated server-side; a client-supplied value is ignored
    - Validation failures never reach the store (HTTP 422)
    - Store errors propagate as TransactionApiError and are rendered by error_handlers
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, status

from transactions_api.api.dependencies import get_transaction_store
from transactions_api.api.responses import success_response
from transactions_api.core.domain_types import generate_trace_number
from transactions_api.core.errors import PayloadValidationError
from transactions_api.core.pagination import (
    offset_for, resolve_limit, resolve_page, total_pages,
)
from transactions_api.core.repository_protocols import TransactionRepository
from transactions_api.core.validate_transaction import (
    validate_create, validate_list_filters,
)
from transactions_api.schemas.transaction import (
    PaginationMeta, TransactionCreate, TransactionFilters,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/transactions", tags=["transactions"])


async def read_json_object(request: Request) -> dict | None:
    """Request body as a dict, or None when it is not a JSON object.

    ValueError covers JSONDecodeError, UnicodeDecodeError and integer literals
    past the interpreter's digit limit; RecursionError covers deep nesting.
    """
    body = await request.body()
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        return None
    return payload if isinstance(payload, dict) else None


@router.post("")
async def create_transaction(
    request: Request,
    store: TransactionRepository = Depends(get_transaction_store),
):
    """Validate the payload, assign a trace number and persist the transfer."""
    fields = await read_json_object(request)
    errors = validate_create(fields)
    if errors:
        raise PayloadValidationError(errors)

    trace_number = generate_trace_number()
    record = TransactionCreate.from_fields(fields, trace_number)
    transaction = await store.create(record)

    return success_response(
        {
            "transaction": transaction,
            "message": "Transaction created successfully",
        },
        status.HTTP_201_CREATED,
    )


@router.get("")
async def list_transactions(
    request: Request,
    store: TransactionRepository = Depends(get_transaction_store),
):
    """List transactions newest first, filtered by creation date, paginated."""
    params = dict(request.query_params)
    errors = validate_list_filters(params)
    if errors:
        raise PayloadValidationError(errors)

    page = resolve_page(params.get("page"))
    limit = resolve_limit(params.get("limit"))
    filters = TransactionFilters.from_params(params)

    result = await store.list(filters, limit, offset_for(page, limit))

    pagination = PaginationMeta(
        current_page=page,
        per_page=limit,
        total_items=result.total,
        total_pages=total_pages(result.total, limit),
    )
    return success_response({
        "transactions": result.items,
        "pagination": pagination.model_dump(by_alias=True),
    })
