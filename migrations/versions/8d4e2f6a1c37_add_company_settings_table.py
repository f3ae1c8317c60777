"""Add company settings table

Revision ID: 8d4e2f6a1c37
Revises: 3f1c9a7d2b10
Create Date: 2025-08-19 16:40:02.518874

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8d4e2f6a1c37'
down_revision: Union[str, None] = '3f1c9a7d2b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Single row; created with defaults on first read if missing
    op.create_table(
        'companysettings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('industry', sa.String(), nullable=False),
        sa.Column('business_model', sa.String(), nullable=False),
        sa.Column('minimum_revenue', sa.Float(), nullable=False),
        sa.Column('base_currency', sa.String(length=3), nullable=False),
        sa.Column('tax_rate', sa.Float(), nullable=False),
        sa.Column('default_discount', sa.Float(), nullable=False),
        sa.Column('base_price', sa.Float(), nullable=False),
        sa.Column('development_hourly_rate', sa.Float(), nullable=False),
        sa.Column('complexity_multiplier_low', sa.Float(), nullable=False),
        sa.Column('complexity_multiplier_medium', sa.Float(), nullable=False),
        sa.Column('complexity_multiplier_high', sa.Float(), nullable=False),
        sa.Column('default_payment_days', sa.Integer(), nullable=False),
        sa.Column('installment_options', sa.String(), nullable=False),
        sa.Column('early_payment_discount', sa.Float(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('companysettings')
