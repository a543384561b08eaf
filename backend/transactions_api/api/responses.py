"""Response Envelopes - the {"status": ...} JSON shape shared by every endpoint.

Invariants:
    - Success bodies: {"status": "success"} plus "data" when there is any
    - Error bodies: {"status": "error", "message": ...} plus "errors" for validation
    - Decimal, datetime and enum values are encoded by jsonable_encoder
"""

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: dict | None = None, status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    body: dict = {"status": "success"}
    if data:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def error_response(
    message: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    errors: dict[str, str] | None = None,
) -> JSONResponse:
    body: dict = {"status": "error", "message": message}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=body)
