"""FastAPI dependency utilities wiring stores and services."""
from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulk_transfer.core.database import get_session_factory
from bulk_transfer.repositories.bank_account import BankAccountRepository
from bulk_transfer.repositories.transaction import TransactionRepository
from bulk_transfer.services.transfer_service import TransferService


def get_bank_account_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> BankAccountRepository:
    """Provide the bank account store."""

    return BankAccountRepository(session_factory)


def get_transaction_repository(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> TransactionRepository:
    """Provide the transaction store."""

    return TransactionRepository(session_factory)


def get_transfer_service(
    bank_accounts: BankAccountRepository = Depends(get_bank_account_repository),
    transactions: TransactionRepository = Depends(get_transaction_repository),
) -> TransferService:
    """Provide the bulk transfer service bound to both stores."""

    return TransferService(bank_accounts, transactions)
