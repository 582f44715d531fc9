"""Store contracts consumed by the transfer service."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success
from bulk_transfer.schemas.bank_account import BankAccountRead
from bulk_transfer.schemas.transaction import TransactionCreate, TransactionRead


class BankAccountStore(Protocol):
    """Reads and per-call transactional writes of bank accounts."""

    async def get_by_iban_and_bic(self, iban: str, bic: str) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        ...

    async def update(self, account: BankAccountRead) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        ...


class TransactionStore(Protocol):
    """Atomic batch insert of transfer transactions."""

    async def save_all(
        self, transactions: Sequence[TransactionCreate]
    ) -> Success[list[TransactionRead]] | Failure[StoreErrorCode]:
        ...
