"""Demo data bootstrap for local development.

Run ``python -m bulk_transfer.db.seed`` to create the schema, empty both
tables and insert the demo organization accounts.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulk_transfer.core.outcome import Failure, StoreErrorCode
from bulk_transfer.db.models import BankAccount, Transaction
from bulk_transfer.repositories.bank_account import BankAccountRepository
from bulk_transfer.schemas.bank_account import BankAccountCreate, BankAccountRead

logger = logging.getLogger(__name__)

DEMO_BANK_ACCOUNTS: tuple[BankAccountCreate, ...] = (
    BankAccountCreate(
        id=1,
        organization_name="ACME Corp",
        balance_cents=9983126634,
        iban="FR10474608000002006107XXXXX",
        bic="OIVUSCLQXXX",
    ),
    BankAccountCreate(
        id=2,
        organization_name="ACME Corp 2",
        balance_cents=10000,
        iban="DE10474608000002006107XXXXX",
        bic="OIVUGERQXXX",
    ),
)


class SeedError(RuntimeError):
    """Raised when a demo account cannot be stored."""

    def __init__(self, failure: Failure[StoreErrorCode]) -> None:
        super().__init__(failure.reason)
        self.failure = failure


async def truncate_tables(session_factory: async_sessionmaker[AsyncSession]) -> None:
    """Remove every transaction and bank account row."""

    async with session_factory() as session, session.begin():
        await session.execute(delete(Transaction))
        await session.execute(delete(BankAccount))


async def seed_bank_accounts(
    repository: BankAccountRepository,
    accounts: Iterable[BankAccountCreate] = DEMO_BANK_ACCOUNTS,
) -> list[BankAccountRead]:
    """Store ``accounts`` one by one, stopping at the first failure."""

    saved: list[BankAccountRead] = []
    for account in accounts:
        result = await repository.save(account)
        if isinstance(result, Failure):
            raise SeedError(result)
        saved.append(result.data)
    logger.info("Seeded bank accounts", extra={"count": len(saved)})
    return saved


async def _main() -> None:
    from bulk_transfer.core.database import ENGINE, SessionLocal, create_database_schema

    await create_database_schema()
    await truncate_tables(SessionLocal)
    await seed_bank_accounts(BankAccountRepository(SessionLocal))
    await ENGINE.dispose()


if __name__ == "__main__":  # pragma: no cover
    from bulk_transfer.core.logging import configure_logging
    from bulk_transfer.core.settings import get_settings

    settings = get_settings()
    configure_logging(settings.log_level, settings.log_json, settings.service_name)
    asyncio.run(_main())
