"""Service orchestrating bulk credit transfers against an organization account.

The protocol is "hold, then commit, release on failure":

1. resolve the source account from its IBAN/BIC,
2. check the balance covers the total of the bulk, in cents,
3. persist the debit immediately (the hold),
4. insert one transaction row per credit transfer as a single batch,
5. when the batch insert fails, write the pre-debit balance back.

The hold and the batch insert are two independent storage transactions, so the
protocol is not atomic across tables. Reading the balance and writing the hold
are not atomic either: two concurrent bulks on one account can both pass the
balance check. The ``CHECK (balance_cents >= 0)`` constraint rejects a hold that
would overdraw the row as written, but a stale read can still overwrite a
concurrent debit. The release writes an absolute balance and shares that window.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success, TransferErrorCode
from bulk_transfer.repositories.bank_account import BankAccountRepository
from bulk_transfer.repositories.contracts import BankAccountStore, TransactionStore
from bulk_transfer.repositories.transaction import TransactionRepository
from bulk_transfer.schemas.bank_account import BankAccountRead
from bulk_transfer.schemas.transaction import TransactionCreate
from bulk_transfer.schemas.transfer import BulkTransferEcho, BulkTransferRequest, CreditTransfer

logger = logging.getLogger(__name__)

CENTS_PER_UNIT = 100


class TransferStage(str, Enum):
    """Progress of a single bulk transfer through the protocol."""

    VALIDATING = "VALIDATING"
    ACCOUNT_RESOLVED = "ACCOUNT_RESOLVED"
    FUNDS_HELD = "FUNDS_HELD"
    TRANSACTIONS_COMMITTED = "TRANSACTIONS_COMMITTED"
    FUNDS_RELEASED = "FUNDS_RELEASED"
    HOLD_UNRECOVERABLE = "HOLD_UNRECOVERABLE"


def to_cents(amount: Decimal) -> int:
    """Convert a major-unit amount to integral minor units."""

    return int((amount * CENTS_PER_UNIT).to_integral_value(rounding=ROUND_HALF_UP))


class TransferService:
    """Debit an account and record its outbound transfers."""

    def __init__(self, bank_accounts: BankAccountStore, transactions: TransactionStore) -> None:
        self.bank_accounts = bank_accounts
        self.transactions = transactions

    async def bulk_transactions(
        self, request: BulkTransferRequest
    ) -> Success[BulkTransferEcho] | Failure[TransferErrorCode]:
        total_amount = sum((transfer.amount_decimal for transfer in request.credit_transfers), Decimal(0))
        total_cents = to_cents(total_amount)

        lookup = await self.bank_accounts.get_by_iban_and_bic(request.organization_iban, request.organization_bic)
        if isinstance(lookup, Failure):
            return self._fail(
                TransferErrorCode.BANK_ACCOUNT_NOT_EXIST,
                "no bank account with these coordinates",
                TransferStage.VALIDATING,
            )
        account = lookup.data

        if account.balance_cents < total_cents:
            return self._fail(
                TransferErrorCode.INSUFFICIENT_FUND,
                "not enough fund to emi bulk transaction",
                TransferStage.ACCOUNT_RESOLVED,
                balance_cents=account.balance_cents,
                total_transfer_amount_cents=total_cents,
            )

        held_account = account.model_copy(update={"balance_cents": account.balance_cents - total_cents})
        hold = await self.bank_accounts.update(held_account)
        if isinstance(hold, Failure):
            return self._fail(
                TransferErrorCode.ERROR_HOLD_FUNDS_BANK_ACCOUNT,
                "Impossible to hold funds for bank account",
                TransferStage.ACCOUNT_RESOLVED,
            )

        rows = [self._build_transaction(transfer, account.id) for transfer in request.credit_transfers]
        saved = await self.transactions.save_all(rows)
        if isinstance(saved, Failure):
            return await self._release_hold(account, total_cents, saved)

        logger.info(
            "Bulk transfer committed",
            extra={
                "stage": TransferStage.TRANSACTIONS_COMMITTED.value,
                "bank_account_id": account.id,
                "transfer_count": len(rows),
                "total_transfer_amount_cents": total_cents,
            },
        )
        return Success(BulkTransferEcho(bulk_transaction=request))

    async def _release_hold(
        self,
        account: BankAccountRead,
        held_cents: int,
        insert_failure: Failure[StoreErrorCode],
    ) -> Failure[TransferErrorCode]:
        restore = await self.bank_accounts.update(account)
        if isinstance(restore, Failure):
            logger.error(
                "Impossible to restore hold funds after failing transactions > Manual intervention",
                extra={
                    "stage": TransferStage.HOLD_UNRECOVERABLE.value,
                    "bank_account": {"bic": account.bic, "iban": account.iban},
                    "original_balance_cents": account.balance_cents,
                    "total_transfer_amount_cents": held_cents,
                },
            )
            return Failure(
                TransferErrorCode.ERROR_RECOVER_HOLD_FUNDS_BANK_ACCOUNT,
                "Impossible to recover hold funds to bank account",
                context={"stage": TransferStage.HOLD_UNRECOVERABLE.value},
            )

        logger.warning(
            "Released held funds after failing to record transactions",
            extra={
                "stage": TransferStage.FUNDS_RELEASED.value,
                "bank_account_id": account.id,
                "total_transfer_amount_cents": held_cents,
            },
        )
        return Failure(
            _pass_through(insert_failure.error_code),
            insert_failure.reason,
            context={"stage": TransferStage.FUNDS_RELEASED.value},
        )

    @staticmethod
    def _build_transaction(transfer: CreditTransfer, bank_account_id: int) -> TransactionCreate:
        return TransactionCreate(
            counterparty_name=transfer.counterparty_name,
            counterparty_iban=transfer.counterparty_iban,
            counterparty_bic=transfer.counterparty_bic,
            amount_cents=to_cents(transfer.amount_decimal),
            amount_currency=transfer.currency,
            bank_account_id=bank_account_id,
            description=transfer.description,
        )

    @staticmethod
    def _fail(
        error_code: TransferErrorCode,
        reason: str,
        stage: TransferStage,
        **context: int,
    ) -> Failure[TransferErrorCode]:
        logger.info("Bulk transfer rejected: %s", error_code.value, extra={"stage": stage.value, **context})
        return Failure(error_code, reason, context={"stage": stage.value, **context})


def _pass_through(error_code: StoreErrorCode) -> TransferErrorCode:
    try:
        return TransferErrorCode(error_code.value)
    except ValueError:
        return TransferErrorCode.DATABASE_ERROR


def build_transfer_service(session_factory: async_sessionmaker[AsyncSession]) -> TransferService:
    """Wire the transfer service to the SQLAlchemy-backed stores."""

    return TransferService(BankAccountRepository(session_factory), TransactionRepository(session_factory))
