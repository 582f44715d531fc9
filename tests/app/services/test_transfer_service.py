"""Unit tests for the bulk transfer service against in-memory stores."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import pytest

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success, TransferErrorCode
from bulk_transfer.schemas.bank_account import BankAccountRead
from bulk_transfer.schemas.transaction import TransactionCreate, TransactionRead
from bulk_transfer.schemas.transfer import BulkTransferEcho, BulkTransferRequest
from bulk_transfer.services.transfer_service import TransferService, TransferStage, to_cents

ACME = BankAccountRead(
    id=1,
    organization_name="ACME Corp",
    balance_cents=9983126634,
    iban="FR10474608000002006107XXXXX",
    bic="OIVUSCLQXXX",
)


class FakeBankAccounts:
    """Bank account store recording every update; updates fail on demand."""

    def __init__(self, account: BankAccountRead | None, failing_updates: Sequence[int] = ()) -> None:
        self.account = account
        self.failing_updates = set(failing_updates)
        self.updates: list[BankAccountRead] = []

    async def get_by_iban_and_bic(self, iban: str, bic: str) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        if self.account is None or (self.account.iban, self.account.bic) != (iban, bic):
            return Failure(StoreErrorCode.BANK_ACCOUNT_NOT_FOUND, "There is no bank account that matches this iban and bic")
        return Success(self.account)

    async def update(self, account: BankAccountRead) -> Success[BankAccountRead] | Failure[StoreErrorCode]:
        self.updates.append(account)
        if len(self.updates) in self.failing_updates:
            return Failure(StoreErrorCode.DATABASE_ERROR, "Cannot save into the db")
        self.account = account
        return Success(account)


class FakeTransactions:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.batches: list[list[TransactionCreate]] = []

    async def save_all(
        self, transactions: Sequence[TransactionCreate]
    ) -> Success[list[TransactionRead]] | Failure[StoreErrorCode]:
        self.batches.append(list(transactions))
        if self.fail:
            return Failure(StoreErrorCode.DATABASE_ERROR, "Cannot save into the db")
        return Success([])


def _request(payload: dict[str, Any], **overrides: Any) -> BulkTransferRequest:
    return BulkTransferRequest.model_validate({**payload, **overrides})


@pytest.mark.parametrize(
    ("amount", "expected"),
    [("14.5", 1450), ("61238", 6123800), ("0.01", 1), ("999.99", 99999)],
)
def test_to_cents_converts_major_units(amount: str, expected: int) -> None:
    assert to_cents(Decimal(amount)) == expected


@pytest.mark.asyncio
async def test_success_debits_total_and_records_each_transfer(bulk_payload: dict[str, Any]) -> None:
    accounts = FakeBankAccounts(ACME)
    transactions = FakeTransactions()
    request = _request(bulk_payload)

    result = await TransferService(accounts, transactions).bulk_transactions(request)

    assert isinstance(result, Success)
    assert isinstance(result.data, BulkTransferEcho)
    assert result.data.bulk_transaction == request
    assert [update.balance_cents for update in accounts.updates] == [9983126634 - 6225150]

    (batch,) = transactions.batches
    assert [row.amount_cents for row in batch] == [1450, 6123800, 99900]
    assert {row.bank_account_id for row in batch} == {ACME.id}
    assert [row.counterparty_name for row in batch] == ["Bip Bip", "Wile E Coyote", "Bugs Bunny"]
    assert all(row.amount_currency == "EUR" for row in batch)


@pytest.mark.asyncio
async def test_unknown_account_fails_without_writes(bulk_payload: dict[str, Any]) -> None:
    accounts = FakeBankAccounts(ACME)
    transactions = FakeTransactions()

    result = await TransferService(accounts, transactions).bulk_transactions(
        _request(bulk_payload, organization_bic="NOT_EXIST")
    )

    assert isinstance(result, Failure)
    assert result.error_code is TransferErrorCode.BANK_ACCOUNT_NOT_EXIST
    assert result.reason == "no bank account with these coordinates"
    assert result.context == {"stage": TransferStage.VALIDATING.value}
    assert accounts.updates == []
    assert transactions.batches == []


@pytest.mark.asyncio
async def test_insufficient_funds_fails_without_writes(bulk_payload: dict[str, Any]) -> None:
    poor = ACME.model_copy(update={"balance_cents": 6225149})
    accounts = FakeBankAccounts(poor)
    transactions = FakeTransactions()

    result = await TransferService(accounts, transactions).bulk_transactions(_request(bulk_payload))

    assert isinstance(result, Failure)
    assert result.error_code is TransferErrorCode.INSUFFICIENT_FUND
    assert result.reason == "not enough fund to emi bulk transaction"
    assert result.context == {
        "stage": TransferStage.ACCOUNT_RESOLVED.value,
        "balance_cents": 6225149,
        "total_transfer_amount_cents": 6225150,
    }
    assert accounts.updates == []
    assert transactions.batches == []


@pytest.mark.asyncio
async def test_balance_equal_to_total_is_accepted(bulk_payload: dict[str, Any]) -> None:
    exact = ACME.model_copy(update={"balance_cents": 6225150})
    accounts = FakeBankAccounts(exact)

    result = await TransferService(accounts, FakeTransactions()).bulk_transactions(_request(bulk_payload))

    assert isinstance(result, Success)
    assert accounts.account is not None
    assert accounts.account.balance_cents == 0


@pytest.mark.asyncio
async def test_hold_failure_skips_insert(bulk_payload: dict[str, Any]) -> None:
    accounts = FakeBankAccounts(ACME, failing_updates=[1])
    transactions = FakeTransactions()

    result = await TransferService(accounts, transactions).bulk_transactions(_request(bulk_payload))

    assert isinstance(result, Failure)
    assert result.error_code is TransferErrorCode.ERROR_HOLD_FUNDS_BANK_ACCOUNT
    assert result.reason == "Impossible to hold funds for bank account"
    assert len(accounts.updates) == 1
    assert transactions.batches == []


@pytest.mark.asyncio
async def test_insert_failure_restores_original_balance(bulk_payload: dict[str, Any]) -> None:
    accounts = FakeBankAccounts(ACME)
    transactions = FakeTransactions(fail=True)

    result = await TransferService(accounts, transactions).bulk_transactions(_request(bulk_payload))

    assert isinstance(result, Failure)
    assert result.error_code is TransferErrorCode.DATABASE_ERROR
    assert result.reason == "Cannot save into the db"
    assert result.context == {"stage": TransferStage.FUNDS_RELEASED.value}
    assert [update.balance_cents for update in accounts.updates] == [9983126634 - 6225150, 9983126634]
    assert accounts.account == ACME


@pytest.mark.asyncio
async def test_failed_release_requires_manual_intervention(
    bulk_payload: dict[str, Any], caplog: pytest.LogCaptureFixture
) -> None:
    accounts = FakeBankAccounts(ACME, failing_updates=[2])
    transactions = FakeTransactions(fail=True)

    with caplog.at_level(logging.ERROR, logger="bulk_transfer.services.transfer_service"):
        result = await TransferService(accounts, transactions).bulk_transactions(_request(bulk_payload))

    assert isinstance(result, Failure)
    assert result.error_code is TransferErrorCode.ERROR_RECOVER_HOLD_FUNDS_BANK_ACCOUNT
    assert result.reason == "Impossible to recover hold funds to bank account"
    assert result.context == {"stage": TransferStage.HOLD_UNRECOVERABLE.value}

    (record,) = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert "Manual intervention" in record.message
    assert record.bank_account == {"bic": ACME.bic, "iban": ACME.iban}
    assert record.original_balance_cents == 9983126634
    assert record.total_transfer_amount_cents == 6225150
