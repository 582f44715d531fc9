"""Strawberry GraphQL schema definition."""
from __future__ import annotations

from datetime import datetime
from typing import NewType, TypeVar

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from bulk_transfer.core.outcome import Failure, StoreErrorCode, Success
from bulk_transfer.graphql.context import GraphQLContext
from bulk_transfer.repositories.bank_account import BankAccountRepository
from bulk_transfer.repositories.transaction import TransactionRepository
from bulk_transfer.schemas.bank_account import BankAccountRead
from bulk_transfer.schemas.transaction import TransactionRead
from bulk_transfer.schemas.transfer import BulkTransferRequest, validate_bulk_transfer
from bulk_transfer.services.transfer_service import build_transfer_service


ResultType = TypeVar("ResultType")

# GraphQL Int is 32-bit; cent amounts routinely exceed it.
BigInt = strawberry.scalar(
    NewType("BigInt", int),
    serialize=int,
    parse_value=int,
    description="Signed 64-bit integer, used for amounts in cents",
)


def _unwrap(result: Success[ResultType] | Failure) -> ResultType:
    if isinstance(result, Failure):
        raise GraphQLError(result.reason, extensions={"errorCode": result.error_code.value})
    return result.data


@strawberry.type
class HealthCheck:
    """Simple health payload."""

    status: str


@strawberry.type
class BankAccountType:
    id: int
    organization_name: str
    balance_cents: BigInt
    iban: str
    bic: str


@strawberry.type
class TransactionType:
    id: int
    counterparty_name: str
    counterparty_iban: str
    counterparty_bic: str
    amount_cents: BigInt
    amount_currency: str
    bank_account_id: int
    description: str
    created_at: datetime


@strawberry.type
class CreditTransferType:
    amount: str
    currency: str
    counterparty_name: str
    counterparty_bic: str
    counterparty_iban: str
    description: str


@strawberry.type
class BulkTransferType:
    organization_name: str
    organization_bic: str
    organization_iban: str
    credit_transfers: list[CreditTransferType]


@strawberry.type
class BulkTransferResult:
    outcome: str
    error_code: str | None = None
    reason: str | None = None
    bulk_transaction: BulkTransferType | None = None


@strawberry.input
class CreditTransferInput:
    amount: str
    counterparty_name: str
    counterparty_bic: str
    counterparty_iban: str
    description: str
    currency: str = "EUR"


@strawberry.input
class BulkTransferInput:
    organization_name: str
    organization_bic: str
    organization_iban: str
    credit_transfers: list[CreditTransferInput]


def _to_bank_account_type(account: BankAccountRead) -> BankAccountType:
    return BankAccountType(
        id=account.id,
        organization_name=account.organization_name,
        balance_cents=account.balance_cents,
        iban=account.iban,
        bic=account.bic,
    )


def _to_transaction_type(transaction: TransactionRead) -> TransactionType:
    return TransactionType(
        id=transaction.id,
        counterparty_name=transaction.counterparty_name,
        counterparty_iban=transaction.counterparty_iban,
        counterparty_bic=transaction.counterparty_bic,
        amount_cents=transaction.amount_cents,
        amount_currency=transaction.amount_currency,
        bank_account_id=transaction.bank_account_id,
        description=transaction.description,
        created_at=transaction.created_at,
    )


def _to_bulk_transfer_type(request: BulkTransferRequest) -> BulkTransferType:
    return BulkTransferType(
        organization_name=request.organization_name,
        organization_bic=request.organization_bic,
        organization_iban=request.organization_iban,
        credit_transfers=[CreditTransferType(**transfer.model_dump()) for transfer in request.credit_transfers],
    )


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(description="Basic service liveness check")
    def health(self) -> HealthCheck:
        return HealthCheck(status="ok")

    @strawberry.field(description="List all bank accounts")
    async def bank_accounts(self, info: Info[GraphQLContext, None]) -> list[BankAccountType]:
        rows = _unwrap(await BankAccountRepository(info.context.session_factory).get_all())
        return [_to_bank_account_type(row) for row in rows]

    @strawberry.field(description="Look up a bank account by its IBAN and BIC")
    async def bank_account(self, info: Info[GraphQLContext, None], iban: str, bic: str) -> BankAccountType | None:
        result = await BankAccountRepository(info.context.session_factory).get_by_iban_and_bic(iban, bic)
        if isinstance(result, Failure) and result.error_code is StoreErrorCode.BANK_ACCOUNT_NOT_FOUND:
            return None
        return _to_bank_account_type(_unwrap(result))

    @strawberry.field(description="List transactions, optionally for a single bank account")
    async def transactions(
        self,
        info: Info[GraphQLContext, None],
        bank_account_id: int | None = None,
    ) -> list[TransactionType]:
        repository = TransactionRepository(info.context.session_factory)
        if bank_account_id is None:
            result = await repository.get_all()
        else:
            result = await repository.list_for_bank_account(bank_account_id)
        return [_to_transaction_type(row) for row in _unwrap(result)]

    @strawberry.field(description="First transaction sent to the given counterparty")
    async def transaction_by_counterparty(
        self,
        info: Info[GraphQLContext, None],
        name: str,
    ) -> TransactionType | None:
        result = await TransactionRepository(info.context.session_factory).get_by_name(name)
        if isinstance(result, Failure) and result.error_code is StoreErrorCode.TRANSACTION_NOT_FOUND:
            return None
        return _to_transaction_type(_unwrap(result))


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(description="Debit an organization account for a bulk of credit transfers")
    async def bulk_transfer(
        self,
        info: Info[GraphQLContext, None],
        payload: BulkTransferInput,
    ) -> BulkTransferResult:
        request, errors = validate_bulk_transfer(strawberry.asdict(payload))
        if request is None:
            raise GraphQLError(
                "Invalid bulk transfer payload",
                extensions={"fieldErrors": [error.model_dump() for error in errors]},
            )

        result = await build_transfer_service(info.context.session_factory).bulk_transactions(request)
        if isinstance(result, Failure):
            return BulkTransferResult(
                outcome=result.outcome,
                error_code=result.error_code.value,
                reason=result.reason,
            )
        return BulkTransferResult(
            outcome=result.outcome,
            bulk_transaction=_to_bulk_transfer_type(result.data.bulk_transaction),
        )


schema = strawberry.Schema(query=Query, mutation=Mutation)
