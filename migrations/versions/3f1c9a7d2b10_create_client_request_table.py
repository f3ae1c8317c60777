"""Create client request table

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2025-08-04 09:12:44.120311

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

request_status = sa.Enum(
    'PENDING', 'SUBMITTED', 'ACCEPTED', 'REJECTED', 'CLIENT_APPROVED', 'IMPLEMENTATION',
    name='requeststatus'
)
request_priority = sa.Enum('LOW', 'MEDIUM', 'HIGH', 'URGENT', name='requestpriority')


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'clientrequest',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('request_id', sa.String(length=64), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('phone_number', sa.String(), nullable=True),
        sa.Column('request_type', sa.String(), nullable=False),
        sa.Column('project_title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('timeline', sa.String(), nullable=True),
        sa.Column('budget', sa.String(), nullable=True),
        sa.Column('technical_requirements', sa.String(), nullable=True),
        sa.Column('business_goals', sa.String(), nullable=True),
        sa.Column('current_challenges', sa.String(), nullable=True),
        sa.Column('expected_outcome', sa.String(), nullable=True),
        sa.Column('status', request_status, nullable=False),
        sa.Column('priority', request_priority, nullable=False),
        sa.Column('source', sa.String(), nullable=False, server_default='website'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('report_location', sa.String(), nullable=True),
        sa.Column('ai_executive_summary', sa.String(), nullable=True),
        sa.Column('ai_technical_analysis', sa.String(), nullable=True),
        sa.Column('ai_implementation_strategy', sa.String(), nullable=True),
        sa.Column('ai_financial_optimization', sa.String(), nullable=True),
        sa.Column('ai_risk_assessment', sa.String(), nullable=True),
        sa.Column('ai_next_steps', sa.String(), nullable=True),
        sa.Column('ai_complexity_score', sa.Float(), nullable=True),
        sa.Column('ai_feasibility_score', sa.Float(), nullable=True),
        sa.Column('ai_recommended_action', sa.String(), nullable=True),
        sa.Column('ai_processed_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_clientrequest_request_id'), 'clientrequest', ['request_id'], unique=True)
    op.create_index(op.f('ix_clientrequest_email'), 'clientrequest', ['email'], unique=False)
    op.create_index(op.f('ix_clientrequest_status'), 'clientrequest', ['status'], unique=False)
    op.create_index(op.f('ix_clientrequest_created_at'), 'clientrequest', ['created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_clientrequest_created_at'), table_name='clientrequest')
    op.drop_index(op.f('ix_clientrequest_status'), table_name='clientrequest')
    op.drop_index(op.f('ix_clientrequest_email'), table_name='clientrequest')
    op.drop_index(op.f('ix_clientrequest_request_id'), table_name='clientrequest')
    op.drop_table('clientrequest')
    request_priority.drop(op.get_bind(), checkfirst=True)
    request_status.drop(op.get_bind(), checkfirst=True)
