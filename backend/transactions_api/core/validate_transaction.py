"""Transaction Validation - pure field checks for the create and list request shapes.

Invariants:
    - Validators are PURE: take an untyped mapping, return {field: message}, never raise
    - An empty dict means valid
    - All checks run; nothing short-circuits. One message per key, last check wins
    - Money comparisons use Decimal (MAX_AMOUNT), never float

Design Decisions:
    - Return error dicts instead of raising: the handler decides how to render them
    - Numeric strings are accepted for amount ("100.50"); booleans are not numbers
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from transactions_api.core.domain_types import (
    AMOUNT_DECIMAL_PLACES,
    AccountType,
    DATE_FORMAT,
    MAX_ACCOUNT_LENGTH,
    MAX_AMOUNT,
    MAX_MEMO_LENGTH,
    MAX_PAGE_SIZE,
    MIN_ACCOUNT_LENGTH,
)


MALFORMED_JSON_MESSAGE = (
    "Invalid JSON data provided. "
    "Make sure to send valid JSON with Content-Type: application/json"
)

REQUIRED_FIELDS: dict[str, str] = {
    "accountNumberFrom": "Account number from is required",
    "accountTypeFrom": "Account type from is required",
    "accountNumberTo": "Account number to is required",
    "accountTypeTo": "Account type to is required",
    "amount": "Amount is required",
    "memo": "Memo is required",
}

ACCOUNT_NUMBER_FIELDS = ("accountNumberFrom", "accountNumberTo")
ACCOUNT_TYPE_FIELDS = ("accountTypeFrom", "accountTypeTo")

_ACCOUNT_NUMBER_RE = re.compile(
    rf"[0-9]{{{MIN_ACCOUNT_LENGTH},{MAX_ACCOUNT_LENGTH}}}"
)
_NUMERIC_RE = re.compile(r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INTEGER_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


# ─── Create ──────────────────────────────────────────────────────

def validate_create(fields: Mapping[str, Any] | None) -> dict[str, str]:
    """Validate a create-transaction payload. None means the body was not a JSON object."""
    if fields is None:
        return {"json": MALFORMED_JSON_MESSAGE}

    errors: dict[str, str] = {}
    errors.update(_check_required(fields))

    for name in ACCOUNT_NUMBER_FIELDS:
        if fields.get(name) is not None:
            _put(errors, name, check_account_number(fields[name]))

    for name in ACCOUNT_TYPE_FIELDS:
        if fields.get(name) is not None:
            _put(errors, name, check_account_type(fields[name]))

    if fields.get("amount") is not None:
        _put(errors, "amount", check_amount(fields["amount"]))

    if not _is_empty(fields.get("memo")):
        _put(errors, "memo", check_memo(fields["memo"]))

    return errors


def check_account_number(value: Any) -> str | None:
    if isinstance(value, str) and _ACCOUNT_NUMBER_RE.fullmatch(value):
        return None
    return (
        f"Account number must be between {MIN_ACCOUNT_LENGTH} "
        f"and {MAX_ACCOUNT_LENGTH} digits"
    )


def check_account_type(value: Any) -> str | None:
    if isinstance(value, str) and value.upper() in AccountType.values():
        return None
    return "Invalid account type. Must be one of: " + ", ".join(AccountType.values())


def check_amount(value: Any) -> str | None:
    """Numeric check takes precedence over the range and precision checks."""
    amount = parse_amount(value)
    if amount is None:
        return "Amount must be a number"
    if amount <= 0:
        return "Amount must be greater than 0"
    if amount > MAX_AMOUNT:
        return "Amount exceeds maximum limit"
    if has_excess_precision(amount):
        return f"Amount must have at most {AMOUNT_DECIMAL_PLACES} decimal places"
    return None


def has_excess_precision(amount: Decimal) -> bool:
    """True when rounding to AMOUNT_DECIMAL_PLACES would change the value."""
    return amount != amount.quantize(Decimal(1).scaleb(-AMOUNT_DECIMAL_PLACES))


def check_memo(value: Any) -> str | None:
    if not isinstance(value, str):
        return "Memo must be a string"
    if len(value) > MAX_MEMO_LENGTH:
        return f"Memo must not exceed {MAX_MEMO_LENGTH} characters"
    return None


def parse_amount(value: Any) -> Decimal | None:
    """Decimal for a JSON number or numeric string; None when not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # str() keeps the shortest repr: 100.5 -> Decimal("100.5")
        amount = Decimal(str(value))
        return amount if amount.is_finite() else None
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return None
    return None


# ─── List filters ────────────────────────────────────────────────

def validate_list_filters(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Validate list query parameters. None (no parameters) is valid."""
    if params is None:
        return {}

    errors: dict[str, str] = {}
    start_raw = params.get("startDate")
    end_raw = params.get("endDate")

    if not _is_empty(start_raw):
        _put(errors, "startDate", check_date(start_raw))
    if not _is_empty(end_raw):
        _put(errors, "endDate", check_date(end_raw))

    if (
        not _is_empty(start_raw) and not _is_empty(end_raw)
        and "startDate" not in errors and "endDate" not in errors
        and parse_date(start_raw) > parse_date(end_raw)
    ):
        errors["dateRange"] = "Start date cannot be after end date"

    if "page" in params:
        _put(errors, "page", check_bounded_int(params["page"], "page", 1))
    if "limit" in params:
        _put(errors, "limit", check_bounded_int(params["limit"], "limit", 1, MAX_PAGE_SIZE))

    return errors


def check_date(value: Any) -> str | None:
    if isinstance(value, str) and parse_date(value) is not None:
        return None
    return "Invalid date format. Use YYYY-MM-DD"


def parse_date(value: str) -> date | None:
    """date for a strict YYYY-MM-DD real calendar date, else None."""
    if not _DATE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        return None


def check_bounded_int(
    value: Any, field: str, minimum: int, maximum: int | None = None,
) -> str | None:
    label = field.capitalize()
    number = parse_int(value)
    if number is None:
        return f"{label} must be an integer"
    if number < minimum:
        return f"{label} must be greater than or equal to {minimum}"
    if maximum is not None and number > maximum:
        return f"{label} must be less than or equal to {maximum}"
    return None


def parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        return int(value)
    return None


# ─── Helpers ─────────────────────────────────────────────────────

def _check_required(fields: Mapping[str, Any]) -> dict[str, str]:
    return {
        name: message
        for name, message in REQUIRED_FIELDS.items()
        if _is_empty(fields.get(name))
    }


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def _put(errors: dict[str, str], key: str, message: str | None) -> None:
    if message is not None:
        errors[key] = message
