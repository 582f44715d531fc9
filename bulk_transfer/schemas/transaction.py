"""Pydantic schemas for persisted transfer transactions."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class TransactionCreate(BaseModel):
    """Ledger entry to insert for one credit transfer line."""

    counterparty_name: str
    counterparty_iban: str
    counterparty_bic: str
    amount_cents: PositiveInt
    amount_currency: str = Field(default="EUR", min_length=3, max_length=3)
    bank_account_id: int
    description: str


class TransactionRead(TransactionCreate):
    """Persisted ledger entry."""

    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
