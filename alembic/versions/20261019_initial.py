"""initial schema: users, budgets, categories, items, transaction types, transactions

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Reusable defaults
DEFAULT_NOW = sa.func.now()


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=DEFAULT_NOW, nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("external_id", sa.String(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)

    op.create_table(
        "budgets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("amount >= 0", name="ck_budgets_amount_non_negative"),
    )
    op.create_index("ix_budgets_user_id", "budgets", ["user_id"])

    op.create_table(
        "budget_categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("budget_id", sa.Integer(), sa.ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_budget_categories_budget_id", "budget_categories", ["budget_id"])

    op.create_table(
        "budget_category_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("budget_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("amount", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.CheckConstraint("amount >= 0", name="ck_budget_category_items_amount_non_negative"),
    )
    op.create_index("ix_budget_category_items_category_id", "budget_category_items", ["category_id"])

    op.create_table(
        "transaction_types",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("budget_id", sa.Integer(), sa.ForeignKey("budgets.id", ondelete="CASCADE"), nullable=True),
        sa.Column("label", sa.String(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_transaction_types_budget_id", "transaction_types", ["budget_id"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("budget_id", sa.Integer(), sa.ForeignKey("budgets.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "item_id",
            sa.Integer(),
            sa.ForeignKey("budget_category_items.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "transaction_type_id",
            sa.Integer(),
            sa.ForeignKey("transaction_types.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_transactions_user_id", "transactions", ["user_id"])
    op.create_index("ix_transactions_budget_id", "transactions", ["budget_id"])
    op.create_index("ix_transactions_item_id", "transactions", ["item_id"])

    # Shared, predefined transaction types (budget_id NULL)
    transaction_types = sa.table(
        "transaction_types",
        sa.column("label", sa.String()),
    )
    op.bulk_insert(
        transaction_types,
        [{"label": "Income"}, {"label": "Expense"}, {"label": "Savings"}],
    )


def downgrade() -> None:
    op.drop_index("ix_transactions_item_id", table_name="transactions")
    op.drop_index("ix_transactions_budget_id", table_name="transactions")
    op.drop_index("ix_transactions_user_id", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_transaction_types_budget_id", table_name="transaction_types")
    op.drop_table("transaction_types")
    op.drop_index("ix_budget_category_items_category_id", table_name="budget_category_items")
    op.drop_table("budget_category_items")
    op.drop_index("ix_budget_categories_budget_id", table_name="budget_categories")
    op.drop_table("budget_categories")
    op.drop_index("ix_budgets_user_id", table_name="budgets")
    op.drop_table("budgets")
    op.drop_index("ix_users_external_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
