"""Create products table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create products table with the soft-delete column pair."""
    op.create_table(
        'products',
        sa.Column('id', postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('price', sa.Numeric(20, 8), nullable=False),
        sa.Column('code', sa.Integer(), sa.Identity(always=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('created_by_id', sa.String(100), nullable=False),
        sa.Column('updated_by_id', sa.String(100), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_by_id', sa.String(100), nullable=True),
        sa.CheckConstraint(
            '(deleted_at IS NULL) = (deleted_by_id IS NULL)',
            name='ck_products_delete_pair',
        ),
        sa.CheckConstraint('price > 0', name='ck_products_price_positive'),
    )

    op.create_unique_constraint('uq_products_code', 'products', ['code'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])
    op.create_index('ix_products_deleted_at', 'products', ['deleted_at'])


def downgrade() -> None:
    """Drop products table."""
    op.drop_index('ix_products_deleted_at', table_name='products')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_constraint('uq_products_code', 'products', type_='unique')
    op.drop_table('products')
