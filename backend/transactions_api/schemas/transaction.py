"""Transaction Schemas - normalized write record, read filters and pagination block.

Invariants:
    - TransactionCreate is only built from fields that passed validate_create()
    - Account types are upper-cased before they reach the store
    - amount is a Decimal with at most two decimal places, held at cent scale;
      rounding never happens silently. trace_number is 32 lowercase hex chars
    - PaginationMeta serializes with camelCase keys (currentPage, perPage, ...)

Design Decisions:
    - Field names of TransactionCreate equal the table's column names, so
      the field values are the insert parameter set
    - Frozen models: records are immutable after creation
"""

from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from transactions_api.core.domain_types import (
    AMOUNT_DECIMAL_PLACES, AccountType, MAX_AMOUNT, MAX_MEMO_LENGTH,
)
from transactions_api.core.validate_transaction import (
    has_excess_precision, parse_amount, parse_date,
)


_ACCOUNT_NUMBER_PATTERN = r"^[0-9]{9,12}$"
_CENTS = Decimal("0.01")


class TransactionCreate(BaseModel):
    """A validated transfer ready for insertion."""
    model_config = ConfigDict(frozen=True)

    account_number_from: str = Field(pattern=_ACCOUNT_NUMBER_PATTERN)
    account_type_from: AccountType
    account_number_to: str = Field(pattern=_ACCOUNT_NUMBER_PATTERN)
    account_type_to: AccountType
    trace_number: str = Field(pattern=r"^[0-9a-f]{32}$")
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    memo: str | None = Field(None, max_length=MAX_MEMO_LENGTH)

    @field_validator("account_type_from", "account_type_to", mode="before")
    @classmethod
    def upper_account_type(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v: Any) -> Any:
        amount = parse_amount(v)
        return amount if amount is not None else v

    @field_validator("amount")
    @classmethod
    def amount_to_cents(cls, v: Decimal) -> Decimal:
        if has_excess_precision(v):
            raise ValueError(
                f"amount must have at most {AMOUNT_DECIMAL_PLACES} decimal places"
            )
        return v.quantize(_CENTS)

    @classmethod
    def from_fields(
        cls, fields: Mapping[str, Any], trace_number: str,
    ) -> "TransactionCreate":
        """Build from a camelCase request payload plus a server-side trace number."""
        return cls(
            account_number_from=fields["accountNumberFrom"],
            account_type_from=fields["accountTypeFrom"],
            account_number_to=fields["accountNumberTo"],
            account_type_to=fields["accountTypeTo"],
            trace_number=trace_number,
            amount=fields["amount"],
            memo=fields.get("memo"),
        )

    def to_row(self) -> dict[str, Any]:
        """Column -> value mapping for the insert statement."""
        row = {name: getattr(self, name) for name in type(self).model_fields}
        return {
            name: value.value if isinstance(value, AccountType) else value
            for name, value in row.items()
        }


class TransactionFilters(BaseModel):
    """Inclusive creation-date range for list queries."""
    model_config = ConfigDict(frozen=True)

    start_date: date | None = None
    end_date: date | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "TransactionFilters":
        """Empty or absent dates mean no bound. Assumes validate_list_filters() passed."""
        return cls(
            start_date=_optional_date(params.get("startDate")),
            end_date=_optional_date(params.get("endDate")),
        )


class PaginationMeta(BaseModel):
    """Pagination block of the list response."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_page: int
    per_page: int
    total_items: int
    total_pages: int


def _optional_date(value: Any) -> date | None:
    if not value:
        return None
    return parse_date(value)
