"""initial_schema

Revision ID: 5f2a9c1d7e43
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2a9c1d7e43'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('email_notifications', sa.Boolean(), nullable=False),
        sa.Column('budget_alerts', sa.Boolean(), nullable=False),
        sa.Column('weekly_report', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('token_hash', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])
    op.create_index('ix_refresh_tokens_token_hash', 'refresh_tokens', ['token_hash'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('txn_date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount > 0', name='ck_transactions_amount_positive'),
        sa.CheckConstraint("type IN ('income', 'expense')", name='ck_transactions_type'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_user_id', 'transactions', ['user_id'])
    op.create_index('ix_transactions_user_id_txn_date', 'transactions', ['user_id', 'txn_date'])
    op.create_index('ix_transactions_user_id_category', 'transactions', ['user_id', 'category'])

    op.create_table(
        'budgets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('limit', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('period', sa.String(length=10), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('"limit" > 0', name='ck_budgets_limit_positive'),
        sa.CheckConstraint("period IN ('monthly', 'yearly')", name='ck_budgets_period'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'category', 'period', name='uq_budget_user_category_period'),
    )
    op.create_index('ix_budgets_user_id', 'budgets', ['user_id'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('icon', sa.String(length=20), nullable=False),
        sa.Column('color', sa.String(length=7), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'user_id', name='uq_category_name_owner'),
    )
    op.create_index('ix_categories_user_id', 'categories', ['user_id'])
    # Default names are unique on their own (user_id is NULL for all of them).
    op.create_index(
        'uq_category_default_name',
        'categories',
        ['name'],
        unique=True,
        postgresql_where=sa.text('is_default'),
        sqlite_where=sa.text('is_default = 1'),
    )


def downgrade() -> None:
    op.drop_index('uq_category_default_name', table_name='categories')
    op.drop_index('ix_categories_user_id', table_name='categories')
    op.drop_table('categories')
    op.drop_index('ix_budgets_user_id', table_name='budgets')
    op.drop_table('budgets')
    op.drop_index('ix_transactions_user_id_category', table_name='transactions')
    op.drop_index('ix_transactions_user_id_txn_date', table_name='transactions')
    op.drop_index('ix_transactions_user_id', table_name='transactions')
    op.drop_table('transactions')
    op.drop_index('ix_refresh_tokens_token_hash', table_name='refresh_tokens')
    op.drop_index('ix_refresh_tokens_user_id', table_name='refresh_tokens')
    op.drop_table('refresh_tokens')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
