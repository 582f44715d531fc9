"""Pydantic schemas for the bulk transfer API."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Largest amount whose cent value still fits a signed 64-bit column.
MAX_AMOUNT = Decimal(2**63 - 1) / 100

# Plain ASCII decimal with at most two fraction digits.
AMOUNT_PATTERN = r"^[0-9]+(\.[0-9]{1,2})?$"


class CreditTransfer(BaseModel):
    """One outbound credit transfer line of a bulk request."""

    amount: str = Field(..., min_length=1, pattern=AMOUNT_PATTERN)
    currency: Literal["EUR"]
    counterparty_name: str = Field(..., min_length=2, max_length=255)
    counterparty_bic: str = Field(..., min_length=4, max_length=11)
    counterparty_iban: str = Field(..., min_length=11, max_length=34)
    description: str = Field(..., min_length=4, max_length=500)

    @field_validator("amount")
    @classmethod
    def _amount_is_positive_decimal(cls, value: str) -> str:
        amount = Decimal(value)
        if amount <= 0:
            raise ValueError("amount must be greater than zero")
        if amount >= MAX_AMOUNT:
            raise ValueError("amount is too large")
        return value

    @property
    def amount_decimal(self) -> Decimal:
        return Decimal(self.amount)


class BulkTransferRequest(BaseModel):
    """Bulk credit transfer order emitted by an organization."""

    organization_name: str = Field(..., min_length=2, max_length=255)
    organization_bic: str = Field(..., min_length=2, max_length=11)
    organization_iban: str = Field(..., min_length=11, max_length=34)
    credit_transfers: list[CreditTransfer]


class BulkTransferEcho(BaseModel):
    """Data carried by a successful bulk transfer outcome."""

    bulk_transaction: BulkTransferRequest = Field(..., alias="bulkTransaction")

    model_config = ConfigDict(populate_by_name=True)


class BulkTransferSuccessResponse(BaseModel):
    """HTTP body returned when the bulk transfer is committed."""

    outcome: Literal["SUCCESS"] = "SUCCESS"
    data: BulkTransferEcho


class FailureResponse(BaseModel):
    """HTTP body returned for business failures."""

    outcome: Literal["FAILURE"] = "FAILURE"
    error_code: str = Field(..., alias="errorCode")
    reason: str

    model_config = ConfigDict(populate_by_name=True)


class FieldError(BaseModel):
    """Single field-level validation problem."""

    loc: list[str | int]
    msg: str
    type: str


class ValidationErrorResponse(BaseModel):
    """HTTP body returned when the request payload is rejected."""

    detail: list[FieldError]


def to_field_errors(errors: Sequence[Mapping[str, Any]]) -> list[FieldError]:
    """Normalize pydantic/FastAPI error dictionaries into field errors."""

    return [
        FieldError(loc=list(error.get("loc", ())), msg=str(error.get("msg", "")), type=str(error.get("type", "")))
        for error in errors
    ]


def validate_bulk_transfer(payload: Any) -> tuple[BulkTransferRequest | None, list[FieldError]]:
    """Validate a raw payload, returning the typed request or the field errors."""

    try:
        return BulkTransferRequest.model_validate(payload), []
    except ValidationError as exc:
        return None, to_field_errors(exc.errors())
