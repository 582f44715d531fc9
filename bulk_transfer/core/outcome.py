"""Tagged result type shared by stores and services.

Every store and service operation returns either a :class:`Success` carrying
operation-specific data or a :class:`Failure` carrying an error code drawn from
a closed enumeration, a human readable reason and optional diagnostic context.
Callers branch on the variant instead of catching exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class StoreErrorCode(str, Enum):
    """Failures reported by the persistence stores."""

    DATABASE_ERROR = "DATABASE_ERROR"
    BANK_ACCOUNT_NOT_FOUND = "BANK_ACCOUNT_NOT_FOUND"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"


class TransferErrorCode(str, Enum):
    """Failures reported by the bulk transfer orchestrator."""

    BANK_ACCOUNT_NOT_EXIST = "BANK_ACCOUNT_NOT_EXIST"
    INSUFFICIENT_FUND = "INSUFFICIENT_FUND"
    ERROR_HOLD_FUNDS_BANK_ACCOUNT = "ERROR_HOLD_FUNDS_BANK_ACCOUNT"
    ERROR_RECOVER_HOLD_FUNDS_BANK_ACCOUNT = "ERROR_RECOVER_HOLD_FUNDS_BANK_ACCOUNT"
    DATABASE_ERROR = "DATABASE_ERROR"


@dataclass(slots=True, frozen=True)
class Success(Generic[T]):
    """Successful outcome wrapping the operation result."""

    data: T

    outcome: ClassVar[str] = "SUCCESS"

    @property
    def is_success(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Failure(Generic[E]):
    """Failed outcome with a stable error code."""

    error_code: E
    reason: str
    context: dict[str, Any] | None = field(default=None)

    outcome: ClassVar[str] = "FAILURE"

    @property
    def is_success(self) -> bool:
        return False


Outcome = Union[Success[T], Failure[E]]


__all__ = [
    "Failure",
    "Outcome",
    "StoreErrorCode",
    "Success",
    "TransferErrorCode",
]
