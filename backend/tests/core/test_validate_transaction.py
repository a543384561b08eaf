"""Transaction Validation - tests for the pure create and list-filter validators.

Tests cover:
    - Malformed payload reported under the "json" key
    - Required-field messages for missing and empty values
    - Account number, account type, amount and memo format rules
    - Checks do not short-circuit; last check for a key wins
    - List filters: calendar dates, date range, page and limit bounds
"""

import pytest

from transactions_api.core.validate_transaction import (
    MALFORMED_JSON_MESSAGE,
    REQUIRED_FIELDS,
    parse_amount,
    validate_create,
    validate_list_filters,
)


def _valid_payload(**overrides):
    payload = {
        "accountNumberFrom": "123456789",
        "accountTypeFrom": "checking",
        "accountNumberTo": "987654321",
        "accountTypeTo": "SAVINGS",
        "amount": 100.50,
        "memo": "Test transaction",
    }
    payload.update(overrides)
    return payload


# ─── validate_create ─────────────────────────────────────────────

def test_valid_payload_has_no_errors():
    assert validate_create(_valid_payload()) == {}


def test_none_payload_reports_json_error_only():
    assert validate_create(None) == {"json": MALFORMED_JSON_MESSAGE}


def test_empty_payload_reports_every_required_field():
    errors = validate_create({})
    assert errors == REQUIRED_FIELDS


@pytest.mark.parametrize("empty", [None, "", [], {}])
def test_empty_values_count_as_missing(empty):
    errors = validate_create(_valid_payload(memo=empty))
    assert errors == {"memo": "Memo is required"}


def test_required_and_format_checks_both_run():
    errors = validate_create({"accountNumberFrom": "123", "amount": -100})
    assert errors["accountNumberFrom"] == "Account number must be between 9 and 12 digits"
    assert errors["amount"] == "Amount must be greater than 0"
    assert errors["accountTypeFrom"] == "Account type from is required"
    assert errors["memo"] == "Memo is required"


def test_zero_amount_is_not_positive():
    errors = validate_create(_valid_payload(amount=0))
    assert errors == {"amount": "Amount must be greater than 0"}


def test_empty_account_number_reports_last_check_message():
    errors = validate_create(_valid_payload(accountNumberTo=""))
    assert errors == {
        "accountNumberTo": "Account number must be between 9 and 12 digits",
    }


@pytest.mark.parametrize("number", ["12345678", "1234567890123", "12345678a", " 123456789", 123456789])
def test_rejects_bad_account_numbers(number):
    errors = validate_create(_valid_payload(accountNumberFrom=number))
    assert errors == {
        "accountNumberFrom": "Account number must be between 9 and 12 digits",
    }


@pytest.mark.parametrize("number", ["123456789", "123456789012"])
def test_accepts_account_number_length_bounds(number):
    assert validate_create(_valid_payload(accountNumberTo=number)) == {}


@pytest.mark.parametrize("account_type", ["checking", "Savings", "CREDIT", "investment"])
def test_account_types_are_case_insensitive(account_type):
    assert validate_create(_valid_payload(accountTypeFrom=account_type)) == {}


def test_rejects_unknown_account_type_listing_valid_values():
    errors = validate_create(_valid_payload(accountTypeTo="INVALID_TYPE"))
    assert errors == {
        "accountTypeTo": (
            "Invalid account type. Must be one of: "
            "CHECKING, SAVINGS, CREDIT, INVESTMENT"
        ),
    }


@pytest.mark.parametrize("amount", ["abc", True, [1], "1,000", "NaN", float("inf")])
def test_non_numeric_amount(amount):
    errors = validate_create(_valid_payload(amount=amount))
    assert errors["amount"] == "Amount must be a number"


@pytest.mark.parametrize("amount", [-100, -0.01, "0", "0.00"])
def test_non_positive_amount(amount):
    errors = validate_create(_valid_payload(amount=amount))
    assert errors["amount"] == "Amount must be greater than 0"


@pytest.mark.parametrize("amount", [1000000000, "999999999.991", 1e12])
def test_amount_above_maximum(amount):
    errors = validate_create(_valid_payload(amount=amount))
    assert errors == {"amount": "Amount exceeds maximum limit"}


@pytest.mark.parametrize("amount", [0.01, "999999999.99", 999999999.99, 1, "42"])
def test_amount_bounds_accepted(amount):
    assert validate_create(_valid_payload(amount=amount)) == {}


@pytest.mark.parametrize("amount", [0.001, "1e-5", "100.555", "1.0000000000000000000000000001"])
def test_amount_with_more_than_two_decimal_places(amount):
    errors = validate_create(_valid_payload(amount=amount))
    assert errors == {"amount": "Amount must have at most 2 decimal places"}


@pytest.mark.parametrize("amount", ["1.000", "100.50", "1E+2", 0.1])
def test_amount_precision_ignores_trailing_zeros(amount):
    assert validate_create(_valid_payload(amount=amount)) == {}


def test_memo_length_limit():
    assert validate_create(_valid_payload(memo="x" * 255)) == {}
    errors = validate_create(_valid_payload(memo="x" * 256))
    assert errors == {"memo": "Memo must not exceed 255 characters"}


def test_memo_must_be_a_string():
    errors = validate_create(_valid_payload(memo=12))
    assert errors == {"memo": "Memo must be a string"}


def test_reports_all_invalid_fields_at_once():
    errors = validate_create(_valid_payload(
        accountNumberFrom="1", accountTypeFrom="X",
        accountNumberTo="2", accountTypeTo="Y", amount="z", memo="m" * 300,
    ))
    assert set(errors) == {
        "accountNumberFrom", "accountTypeFrom", "accountNumberTo",
        "accountTypeTo", "amount", "memo",
    }


def test_parse_amount_is_decimal_exact():
    assert str(parse_amount(100.50)) == "100.5"
    assert str(parse_amount("999999999.99")) == "999999999.99"
    assert parse_amount(False) is None


# ─── validate_list_filters ───────────────────────────────────────

def test_no_params_is_valid():
    assert validate_list_filters(None) == {}
    assert validate_list_filters({}) == {}


def test_valid_filters():
    params = {"startDate": "2025-01-01", "endDate": "2025-12-31", "page": "2", "limit": "100"}
    assert validate_list_filters(params) == {}


@pytest.mark.parametrize("value", ["2025-02-30", "2025-13-01", "01-01-2025", "2025-1-1", "yesterday"])
def test_invalid_dates(value):
    errors = validate_list_filters({"startDate": value})
    assert errors == {"startDate": "Invalid date format. Use YYYY-MM-DD"}


def test_empty_dates_are_ignored():
    assert validate_list_filters({"startDate": "", "endDate": ""}) == {}


def test_start_after_end_is_a_range_error():
    errors = validate_list_filters({"startDate": "2025-06-02", "endDate": "2025-06-01"})
    assert errors == {"dateRange": "Start date cannot be after end date"}


def test_same_start_and_end_is_valid():
    assert validate_list_filters({"startDate": "2025-06-01", "endDate": "2025-06-01"}) == {}


def test_range_not_checked_when_a_date_is_invalid():
    errors = validate_list_filters({"startDate": "2025-06-02", "endDate": "2025-02-30"})
    assert errors == {"endDate": "Invalid date format. Use YYYY-MM-DD"}


@pytest.mark.parametrize("page,message", [
    ("0", "Page must be greater than or equal to 1"),
    ("-3", "Page must be greater than or equal to 1"),
    ("abc", "Page must be an integer"),
    ("", "Page must be an integer"),
])
def test_invalid_page(page, message):
    assert validate_list_filters({"page": page}) == {"page": message}


@pytest.mark.parametrize("limit,message", [
    ("0", "Limit must be greater than or equal to 1"),
    ("101", "Limit must be less than or equal to 100"),
    ("1.5", "Limit must be an integer"),
])
def test_invalid_limit(limit, message):
    assert validate_list_filters({"limit": limit}) == {"limit": message}
