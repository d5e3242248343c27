"""Initial compliance tables: users, leave policies, leave requests, holidays

Revision ID: 001_initial_compliance
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_compliance'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    existing = set(sa.inspect(op.get_bind()).get_table_names())

    if 'users' not in existing:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=False),
            sa.Column('role', sa.Enum('admin', 'manager', 'employee', name='userrole'), nullable=False),
            sa.Column('department', sa.String(length=100), nullable=True),
            sa.Column('manager_id', sa.Integer(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps(),
            sa.ForeignKeyConstraint(['manager_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if 'leave_policies' not in existing:
        op.create_table(
            'leave_policies',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('leave_type', sa.String(length=50), nullable=False),
            sa.Column('total_days_per_year', sa.Integer(), nullable=False),
            sa.Column('can_carry_forward', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('max_carry_forward_days', sa.Integer(), nullable=True),
            sa.Column('requires_approval', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('allow_half_day', sa.Boolean(), nullable=False, server_default=sa.true()),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.CheckConstraint('total_days_per_year >= 0', name='check_total_days_non_negative'),
            sa.CheckConstraint(
                'max_carry_forward_days IS NULL OR (max_carry_forward_days >= 0 AND max_carry_forward_days <= 30)',
                name='check_max_carry_forward_range',
            ),
            sa.CheckConstraint(
                'NOT can_carry_forward OR max_carry_forward_days IS NOT NULL',
                name='check_carry_forward_requires_max',
            ),
        )
        op.create_index(op.f('ix_leave_policies_id'), 'leave_policies', ['id'], unique=False)
        op.create_index(op.f('ix_leave_policies_leave_type'), 'leave_policies', ['leave_type'], unique=True)

    if 'leave_requests' not in existing:
        op.create_table(
            'leave_requests',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column(
                'leave_type',
                sa.Enum('annual', 'sick', 'casual', 'emergency', 'maternity', 'paternity', name='leavetype'),
                nullable=False,
            ),
            sa.Column('start_date', sa.Date(), nullable=False),
            sa.Column('end_date', sa.Date(), nullable=False),
            sa.Column('total_days', sa.Numeric(5, 1), nullable=False),
            sa.Column('reason', sa.Text(), nullable=False),
            sa.Column(
                'status',
                sa.Enum('pending', 'approved', 'rejected', 'escalated', name='leavestatus'),
                nullable=False,
                server_default='pending',
            ),
            sa.Column('is_half_day', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('half_day_period', sa.Enum('morning', 'afternoon', name='halfdayperiod'), nullable=True),
            sa.Column('emergency_contact', sa.String(length=255), nullable=True),
            sa.Column('work_handover', sa.Text(), nullable=True),
            sa.Column(
                'submitted_at',
                sa.DateTime(timezone=True),
                server_default=sa.text('CURRENT_TIMESTAMP'),
                nullable=False,
            ),
            *_timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.CheckConstraint('start_date <= end_date', name='check_start_date_le_end_date')
        )
        op.create_index(op.f('ix_leave_requests_id'), 'leave_requests', ['id'], unique=False)
        op.create_index(op.f('ix_leave_requests_user_id'), 'leave_requests', ['user_id'], unique=False)
        op.create_index('ix_leave_requests_user_dates', 'leave_requests', ['user_id', 'start_date', 'end_date'], unique=False)
        op.create_index('ix_leave_requests_user_submitted', 'leave_requests', ['user_id', 'submitted_at'], unique=False)

    if 'holidays' not in existing:
        op.create_table(
            'holidays',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column(
                'type',
                sa.Enum('public', 'company', 'religious', 'national', name='holidaytype'),
                nullable=False,
            ),
            sa.Column('is_recurring', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name', 'date', name='uq_holiday_name_date')
        )
        op.create_index(op.f('ix_holidays_id'), 'holidays', ['id'], unique=False)
        op.create_index(op.f('ix_holidays_date'), 'holidays', ['date'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_holidays_date'), table_name='holidays')
    op.drop_index(op.f('ix_holidays_id'), table_name='holidays')
    op.drop_table('holidays')

    op.drop_index('ix_leave_requests_user_submitted', table_name='leave_requests')
    op.drop_index('ix_leave_requests_user_dates', table_name='leave_requests')
    op.drop_index(op.f('ix_leave_requests_user_id'), table_name='leave_requests')
    op.drop_index(op.f('ix_leave_requests_id'), table_name='leave_requests')
    op.drop_table('leave_requests')

    op.drop_index(op.f('ix_leave_policies_leave_type'), table_name='leave_policies')
    op.drop_index(op.f('ix_leave_policies_id'), table_name='leave_policies')
    op.drop_table('leave_policies')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        for enum_name in ('holidaytype', 'halfdayperiod', 'leavestatus', 'leavetype', 'userrole'):
            sa.Enum(name=enum_name).drop(bind, checkfirst=True)
