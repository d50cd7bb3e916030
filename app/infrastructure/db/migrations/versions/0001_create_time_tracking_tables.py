"""Create time entry and audit log tables

Revision ID: 0001
Revises:
Create Date: 2024-03-01 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create time_entries table
    op.create_table('time_entries',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('client_id', sa.Integer(), nullable=False),
    sa.Column('project_id', sa.Integer(), nullable=False),
    sa.Column('date', sa.Date(), nullable=False),
    sa.Column('year', sa.Integer(), nullable=False),
    sa.Column('month', sa.Integer(), nullable=False),
    sa.Column('week', sa.Integer(), nullable=False),
    sa.Column('hours', sa.Numeric(precision=5, scale=2), nullable=False),
    sa.Column('description', sa.Text(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=True),
    sa.CheckConstraint('hours > 0 AND hours <= 24', name='time_entry_hours_range'),
    sa.CheckConstraint('month BETWEEN 1 AND 12', name='time_entry_month_range'),
    sa.CheckConstraint('week BETWEEN 1 AND 53', name='time_entry_week_range'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_time_entries_user_date', 'time_entries', ['user_id', 'date'], unique=False)
    op.create_index('idx_time_entries_client', 'time_entries', ['client_id'], unique=False)
    op.create_index('idx_time_entries_project', 'time_entries', ['project_id'], unique=False)
    op.create_index('idx_time_entries_year_month', 'time_entries', ['year', 'month'], unique=False)
    op.create_index('idx_time_entries_year_week', 'time_entries', ['year', 'week'], unique=False)

    # Create audit_logs table; logs outlive entries so time_entry_id has no foreign key
    op.create_table('audit_logs',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('time_entry_id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('action', sa.String(length=20), nullable=False),
    sa.Column('previous_value', sa.Text(), nullable=True),
    sa.Column('new_value', sa.Text(), nullable=True),
    sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
    sa.CheckConstraint("action IN ('create', 'update', 'delete')", name='audit_log_valid_action'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_audit_logs_time_entry', 'audit_logs', ['time_entry_id', 'timestamp'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_audit_logs_time_entry', table_name='audit_logs')
    op.drop_table('audit_logs')

    op.drop_index('idx_time_entries_year_week', table_name='time_entries')
    op.drop_index('idx_time_entries_year_month', table_name='time_entries')
    op.drop_index('idx_time_entries_project', table_name='time_entries')
    op.drop_index('idx_time_entries_client', table_name='time_entries')
    op.drop_index('idx_time_entries_user_date', table_name='time_entries')
    op.drop_table('time_entries')
