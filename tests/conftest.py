"""Shared pytest fixtures for bulk transfer tests."""
from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bulk_transfer.db.base import Base
from bulk_transfer.db.seed import DEMO_BANK_ACCOUNTS, seed_bank_accounts
from bulk_transfer.repositories.bank_account import BankAccountRepository
from bulk_transfer.repositories.transaction import TransactionRepository
from bulk_transfer.schemas.bank_account import BankAccountRead

BULK_TRANSFER_PAYLOAD: dict[str, Any] = {
    "organization_name": "ACME Corp",
    "organization_bic": "OIVUSCLQXXX",
    "organization_iban": "FR10474608000002006107XXXXX",
    "credit_transfers": [
        {
            "amount": "14.5",
            "currency": "EUR",
            "counterparty_name": "Bip Bip",
            "counterparty_bic": "CRLYFRPPTOU",
            "counterparty_iban": "EE383680981021245685",
            "description": "Wonderland/4410",
        },
        {
            "amount": "61238",
            "currency": "EUR",
            "counterparty_name": "Wile E Coyote",
            "counterparty_bic": "ZDRPLBQI",
            "counterparty_iban": "DE9935420810036209081725212",
            "description": "//TeslaMotors/Invoice/12",
        },
        {
            "amount": "999",
            "currency": "EUR",
            "counterparty_name": "Bugs Bunny",
            "counterparty_bic": "RNJZNTMC",
            "counterparty_iban": "FR0010009380540930414023042",
            "description": "2020 09 24/2020 09 25/GoldenCarrot/",
        },
    ],
}

# 14.50 + 61238.00 + 999.00
BULK_TRANSFER_TOTAL_CENTS = 6225150


@pytest.fixture()
def bulk_payload() -> dict[str, Any]:
    """Fresh copy of the three-line ACME Corp bulk transfer."""

    return copy.deepcopy(BULK_TRANSFER_PAYLOAD)


@pytest_asyncio.fixture()
async def session_factory(tmp_path: Path) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    try:
        yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    finally:
        await engine.dispose()


@pytest.fixture()
def bank_account_repository(session_factory: async_sessionmaker[AsyncSession]) -> BankAccountRepository:
    return BankAccountRepository(session_factory)


@pytest.fixture()
def transaction_repository(session_factory: async_sessionmaker[AsyncSession]) -> TransactionRepository:
    return TransactionRepository(session_factory)


@pytest_asyncio.fixture()
async def seeded_accounts(bank_account_repository: BankAccountRepository) -> list[BankAccountRead]:
    """Both demo organization accounts, stored."""

    return await seed_bank_accounts(bank_account_repository, DEMO_BANK_ACCOUNTS)
