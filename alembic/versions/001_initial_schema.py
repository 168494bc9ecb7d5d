"""Initial schema - session and review tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'session',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('shop', sa.String(length=255), nullable=False),
        sa.Column('state', sa.String(length=255), nullable=True),
        sa.Column('is_online', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('scope', sa.Text(), nullable=True),
        sa.Column('expires', sa.DateTime(), nullable=True),
        sa.Column('access_token', sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_session_shop', 'session', ['shop'])

    op.create_table(
        'review',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('shop', sa.String(length=255), nullable=False),
        sa.Column('product_id', sa.String(length=255), nullable=False),
        sa.Column('snippet', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shop', 'product_id', name='uq_review_shop_product_id'),
    )
    op.create_index('ix_review_shop', 'review', ['shop'])


def downgrade() -> None:
    op.drop_index('ix_review_shop', table_name='review')
    op.drop_table('review')
    op.drop_index('ix_session_shop', table_name='session')
    op.drop_table('session')
