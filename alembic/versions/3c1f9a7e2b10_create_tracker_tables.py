"""create notes, habits, habit logs, transactions, checklists and goals tables

Revision ID: 3c1f9a7e2b10
Revises: 
Create Date: 2026-10-18 10:12:44.381204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'notes',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('idx_notes_updated_at', 'notes', ['updated_at'])

    op.create_table(
        'habits',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('current_streak', sa.Integer, nullable=False),
        sa.Column('longest_streak', sa.Integer, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=True),
    )
    op.create_table(
        'habit_logs',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('habit_id', sa.Integer, sa.ForeignKey('habits.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date, nullable=False),
        sa.Column('completed', sa.Boolean, nullable=False),
        sa.UniqueConstraint('habit_id', 'date', name='uq_habit_log_habit_date'),
    )
    op.create_index('idx_habit_logs_date', 'habit_logs', ['date'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('amount', sa.DECIMAL(10, 2), nullable=False),
        sa.Column('type', sa.Enum('INCOME', 'EXPENSE', name='transactiontype'), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
    )
    op.create_index('idx_transactions_date', 'transactions', ['date'])
    op.create_index('idx_transactions_type_date', 'transactions', ['type', 'date'])

    op.create_table(
        'checklists',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=True),
    )
    op.create_table(
        'checklist_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('checklist_id', sa.Integer, sa.ForeignKey('checklists.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('completed', sa.Boolean, nullable=False),
        sa.Column('order', sa.Integer, nullable=False),
    )
    op.create_index('idx_checklist_items_checklist_order', 'checklist_items', ['checklist_id', 'order'])

    op.create_table(
        'goals',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('target_value', sa.DECIMAL(10, 2), nullable=True),
        sa.Column('current_value', sa.DECIMAL(10, 2), nullable=False),
        sa.Column('unit', sa.String(50), nullable=True),
        sa.Column(
            'status',
            sa.Enum('NOT_STARTED', 'IN_PROGRESS', 'COMPLETED', 'ON_HOLD', name='goalstatus'),
            nullable=False,
        ),
        sa.Column('start_date', sa.DateTime, nullable=False),
        sa.Column('target_date', sa.DateTime, nullable=True),
        sa.Column('motivation_media', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=True),
    )
    op.create_index('idx_goals_status', 'goals', ['status'])


def downgrade() -> None:
    op.drop_table('goals')
    op.drop_table('checklist_items')
    op.drop_table('checklists')
    op.drop_table('transactions')
    op.drop_table('habit_logs')
    op.drop_table('habits')
    op.drop_table('notes')
    # Postgres keeps enum types around after their tables are gone
    sa.Enum(name='goalstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='transactiontype').drop(op.get_bind(), checkfirst=True)
