"""Pydantic schemas exposed by the API layer."""
from .bank_account import BankAccountCreate, BankAccountRead
from .transaction import TransactionCreate, TransactionRead
from .transfer import (
    BulkTransferEcho,
    BulkTransferRequest,
    BulkTransferSuccessResponse,
    CreditTransfer,
    FailureResponse,
    FieldError,
    ValidationErrorResponse,
    to_field_errors,
    validate_bulk_transfer,
)

__all__ = [
    "BankAccountCreate",
    "BankAccountRead",
    "TransactionCreate",
    "TransactionRead",
    "BulkTransferEcho",
    "BulkTransferRequest",
    "BulkTransferSuccessResponse",
    "CreditTransfer",
    "FailureResponse",
    "FieldError",
    "ValidationErrorResponse",
    "to_field_errors",
    "validate_bulk_transfer",
]
