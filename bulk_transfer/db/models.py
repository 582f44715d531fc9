"""ORM model definitions for bank accounts and their outbound transfers."""
from __future__ import annotations

from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

CURRENCY_CODE = String(3)
DEFAULT_CURRENCY = "EUR"


class BankAccount(Base, TimestampMixin):
    """Organization bank account debited by bulk transfers."""

    __tablename__ = "bank_accounts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    organization_name: Mapped[str] = mapped_column(String(255), nullable=False)
    balance_cents: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    iban: Mapped[str] = mapped_column(String(34), nullable=False)
    bic: Mapped[str] = mapped_column(String(11), nullable=False)

    transactions: Mapped[list["Transaction"]] = relationship("Transaction", back_populates="bank_account")

    __table_args__ = (
        UniqueConstraint("iban", "bic", name="uq_bank_account_iban_bic"),
        CheckConstraint("balance_cents >= 0", name="ck_bank_account_balance_non_negative"),
    )


class Transaction(Base, TimestampMixin):
    """Outbound credit transfer persisted as part of a bulk transfer."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    counterparty_name: Mapped[str] = mapped_column(String(255), nullable=False)
    counterparty_iban: Mapped[str] = mapped_column(String(34), nullable=False)
    counterparty_bic: Mapped[str] = mapped_column(String(11), nullable=False)
    amount_cents: Mapped[int] = mapped_column(BigInteger, nullable=False)
    amount_currency: Mapped[str] = mapped_column(CURRENCY_CODE, nullable=False, default=DEFAULT_CURRENCY)
    bank_account_id: Mapped[int] = mapped_column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)

    bank_account: Mapped[BankAccount] = relationship("BankAccount", back_populates="transactions")

    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_transaction_amount_positive"),
        Index("ix_transaction_bank_account", "bank_account_id"),
        Index("ix_transaction_counterparty_name", "counterparty_name"),
    )


__all__ = [
    "BankAccount",
    "Transaction",
    "CURRENCY_CODE",
    "DEFAULT_CURRENCY",
]
