"""Initial schema for bank accounts and bulk transfer transactions.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    op.create_table(
        "bank_accounts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("organization_name", sa.String(length=255), nullable=False),
        sa.Column("balance_cents", sa.BigInteger(), nullable=False, server_default=sa.text("0")),
        sa.Column("iban", sa.String(length=34), nullable=False),
        sa.Column("bic", sa.String(length=11), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.UniqueConstraint("iban", "bic", name="uq_bank_account_iban_bic"),
        sa.CheckConstraint("balance_cents >= 0", name="ck_bank_account_balance_non_negative"),
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("counterparty_name", sa.String(length=255), nullable=False),
        sa.Column("counterparty_iban", sa.String(length=34), nullable=False),
        sa.Column("counterparty_bic", sa.String(length=11), nullable=False),
        sa.Column("amount_cents", sa.BigInteger(), nullable=False),
        sa.Column("amount_currency", sa.String(length=3), nullable=False, server_default=sa.text("'EUR'")),
        sa.Column("bank_account_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.ForeignKeyConstraint(["bank_account_id"], ["bank_accounts.id"]),
        sa.CheckConstraint("amount_cents > 0", name="ck_transaction_amount_positive"),
    )
    op.create_index("ix_transaction_bank_account", "transactions", ["bank_account_id"])
    op.create_index("ix_transaction_counterparty_name", "transactions", ["counterparty_name"])


def downgrade() -> None:
    op.drop_index("ix_transaction_counterparty_name", table_name="transactions")
    op.drop_index("ix_transaction_bank_account", table_name="transactions")
    op.drop_table("transactions")
    op.drop_table("bank_accounts")
