"""Repository for bank account entities."""
from __future__ import annotations

from sqlalchemy import update
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success
from bulk_transfer.db.models import BankAccount
from bulk_transfer.schemas.bank_account import BankAccountCreate, BankAccountRead

from .base import Repository


class BankAccountRepository(Repository[BankAccount]):
    """Bank account store keyed by IBAN+BIC and by numeric id."""

    model = BankAccount

    async def save(self, account: BankAccountCreate) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        entity = self.model(**account.model_dump(exclude_none=True))
        try:
            async with self.session_factory() as session, session.begin():
                session.add(entity)
                await session.flush()
                saved = BankAccountRead.model_validate(entity)
        except SQLAlchemyError:
            return self._write_failure(iban=account.iban, bic=account.bic)
        return Success(saved)

    async def update(self, account: BankAccountRead) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        """Overwrite the stored row with ``account``, balance included."""

        statement = (
            update(self.model)
            .where(self.model.id == account.id)
            .values(
                organization_name=account.organization_name,
                balance_cents=account.balance_cents,
                iban=account.iban,
                bic=account.bic,
            )
        )
        try:
            async with self.session_factory() as session, session.begin():
                result = await session.execute(statement)
                if result.rowcount == 0:
                    raise NoResultFound(f"Bank account {account.id} does not exist")
        except SQLAlchemyError:
            return self._write_failure(bank_account_id=account.id)
        return Success(account)

    async def get(self, account_id: int) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        try:
            entity = await self._fetch_first(self._base_query().where(self.model.id == account_id))
        except SQLAlchemyError:
            return self._read_failure(bank_account_id=account_id)
        if entity is None:
            return Failure(
                StoreErrorCode.BANK_ACCOUNT_NOT_FOUND,
                "There is no bank account with this id",
                context={"id": account_id},
            )
        return Success(BankAccountRead.model_validate(entity))

    async def get_all(self) -> Success[list[BankAccountRead]] | Failure[StoreErrorCode]:
        try:
            rows = await self._fetch_all(self._base_query().order_by(self.model.id))
        except SQLAlchemyError:
            return self._read_failure()
        return Success([BankAccountRead.model_validate(row) for row in rows])

    async def get_by_iban_and_bic(self, iban: str, bic: str) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        statement = self._base_query().where(self.model.iban == iban).where(self.model.bic == bic)
        try:
            entity = await self._fetch_first(statement)
        except SQLAlchemyError:
            return self._read_failure(iban=iban, bic=bic)
        if entity is None:
            return Failure(
                StoreErrorCode.BANK_ACCOUNT_NOT_FOUND,
                "There is no bank account that matches this iban and bic",
                context={"iban": iban, "bic": bic},
            )
        return Success(BankAccountRead.model_validate(entity))
