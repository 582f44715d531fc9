"""Repository for transfer transaction entities."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success
from bulk_transfer.db.models import Transaction
from bulk_transfer.schemas.transaction import TransactionCreate, TransactionRead

from .base import Repository


class TransactionRepository(Repository[Transaction]):
    """Transaction store with batch insert and lookup helpers."""

    model = Transaction

    async def save_all(
        self, transactions: Sequence[TransactionCreate]
    ) -> Success[list[TransactionRead]] | Failure[StoreErrorCode]:
        """Insert the whole batch in one transaction: every row or none."""

        entities = [self.model(**item.model_dump()) for item in transactions]
        try:
            async with self.session_factory() as session, session.begin():
                session.add_all(entities)
                await session.flush()
                saved = [TransactionRead.model_validate(entity) for entity in entities]
        except SQLAlchemyError:
            return self._write_failure(batch_size=len(entities))
        return Success(saved)

    async def get_all(self) -> Success[list[TransactionRead]] | Failure[StoreErrorCode]:
        try:
            rows = await self._fetch_all(self._base_query().order_by(self.model.id))
        except SQLAlchemyError:
            return self._read_failure()
        return Success([TransactionRead.model_validate(row) for row in rows])

    async def get_by_name(self, name: str) -> Success[TransactionRead] | Failure[StoreErrorCode]:
        """Return the first transaction whose counterparty is ``name``."""

        statement = self._base_query().where(self.model.counterparty_name == name).order_by(self.model.id)
        try:
            entity = await self._fetch_first(statement)
        except SQLAlchemyError:
            return self._read_failure(counterparty_name=name)
        if entity is None:
            return Failure(
                StoreErrorCode.TRANSACTION_NOT_FOUND,
                "There is no transaction that matches this name",
                context={"name": name},
            )
        return Success(TransactionRead.model_validate(entity))

    async def list_for_bank_account(
        self, bank_account_id: int
    ) -> Success[list[TransactionRead]] | Failure[StoreErrorCode]:
        statement = (
            self._base_query()
            .where(self.model.bank_account_id == bank_account_id)
            .order_by(self.model.id)
        )
        try:
            rows = await self._fetch_all(statement)
        except SQLAlchemyError:
            return self._read_failure(bank_account_id=bank_account_id)
        return Success([TransactionRead.model_validate(row) for row in rows])
