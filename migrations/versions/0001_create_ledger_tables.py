"""Create accounts, transactions and transaction_entries.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACCOUNT_TYPES = ("ASSET", "LIABILITY", "EQUITY", "REVENUE", "EXPENSE")


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=20), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "account_type",
            sa.Enum(*ACCOUNT_TYPES, name="account_type_enum"),
            nullable=False,
        ),
        sa.Column("balance", sa.Numeric(19, 4), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_accounts_account_type", "accounts", ["account_type"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("reference", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_transactions_date", "transactions", ["date"])

    op.create_table(
        "transaction_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "transaction_id",
            sa.Integer(),
            sa.ForeignKey("transactions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "account_id",
            sa.Integer(),
            sa.ForeignKey("accounts.id"),
            nullable=False,
        ),
        sa.Column("debit", sa.Numeric(19, 4), nullable=False, server_default="0"),
        sa.Column("credit", sa.Numeric(19, 4), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "debit >= 0 AND credit >= 0", name="ck_entry_non_negative"
        ),
        sa.CheckConstraint(
            "(debit > 0 AND credit = 0) OR (credit > 0 AND debit = 0)",
            name="ck_entry_one_side",
        ),
    )
    op.create_index(
        "ix_transaction_entries_transaction_id",
        "transaction_entries",
        ["transaction_id"],
    )
    op.create_index(
        "ix_transaction_entries_account_id", "transaction_entries", ["account_id"]
    )
    op.create_index(
        "ix_transaction_entries_created_at", "transaction_entries", ["created_at"]
    )


def downgrade() -> None:
    op.drop_table("transaction_entries")
    op.drop_table("transactions")
    op.drop_table("accounts")
    sa.Enum(name="account_type_enum").drop(op.get_bind(), checkfirst=True)
