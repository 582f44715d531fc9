"""Pydantic schemas for bank account records."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt


class BankAccountCreate(BaseModel):
    """Payload used by onboarding/bootstrap to register an account."""

    id: int | None = None
    organization_name: str = Field(..., min_length=1, max_length=255)
    balance_cents: NonNegativeInt = 0
    iban: str = Field(..., min_length=1, max_length=34)
    bic: str = Field(..., min_length=1, max_length=11)


class BankAccountRead(BaseModel):
    """Bank account as handed out by the bank account store."""

    id: int
    organization_name: str
    balance_cents: int
    iban: str
    bic: str

    model_config = ConfigDict(from_attributes=True, frozen=True)
