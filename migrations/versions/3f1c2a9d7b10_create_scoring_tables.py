"""Create catalog, result, ledger and rollup tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-03-24 19:49:08.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=80), nullable=False, unique=True),
        sa.Column('email', sa.String(length=120), nullable=False, unique=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='student'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('student','admin')"),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'blocks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('block_number', sa.Integer(), nullable=False, unique=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.CheckConstraint('end_date > start_date', name='ck_block_dates'),
    )

    op.create_table(
        'training_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('block_id', sa.Integer(), sa.ForeignKey('blocks.id', ondelete='CASCADE'), nullable=False),
        sa.Column('week_number', sa.Integer(), nullable=False),
        sa.Column('session_number', sa.Integer(), nullable=True),
        sa.Column('session_type', sa.String(length=20), nullable=False),
        sa.Column('release_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("session_type IN ('training','testing','rest')"),
        sa.CheckConstraint('week_number >= 1', name='ck_training_sessions_week'),
    )
    op.create_index('ix_training_sessions_block_id', 'training_sessions', ['block_id'])
    op.create_index('ix_training_sessions_session_type', 'training_sessions', ['session_type'])
    op.create_index('ix_training_sessions_created_at', 'training_sessions', ['created_at'])
    op.create_index('idx_training_sessions_block_week', 'training_sessions', ['block_id', 'week_number'])

    op.create_table(
        'training_results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('warmup_completed', sa.String(length=20), nullable=True),
        sa.Column('plyometrics_score', sa.String(length=50), nullable=True),
        sa.Column('power_score', sa.String(length=50), nullable=True),
        sa.Column('lower_body_strength_score', sa.String(length=50), nullable=True),
        sa.Column('upper_body_core_strength_score', sa.String(length=50), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'session_id', name='uq_training_results_user_session'),
    )
    op.create_index('ix_training_results_user_id', 'training_results', ['user_id'])
    op.create_index('ix_training_results_session_id', 'training_results', ['session_id'])

    measurement = sa.Numeric(6, 1, asdecimal=False)
    op.create_table(
        'test_results',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('training_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('standing_long_jump', measurement, nullable=True),
        sa.Column('single_leg_jump_left', measurement, nullable=True),
        sa.Column('single_leg_jump_right', measurement, nullable=True),
        sa.Column('wall_sit_assessment', measurement, nullable=True),
        sa.Column('high_plank_assessment', measurement, nullable=True),
        sa.Column('bent_arm_hang_assessment', measurement, nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'session_id', name='uq_test_results_user_session'),
    )
    op.create_index('ix_test_results_user_id', 'test_results', ['user_id'])
    op.create_index('ix_test_results_session_id', 'test_results', ['session_id'])

    op.create_table(
        'xp_transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('xp_amount', sa.Integer(), nullable=False),
        sa.Column('xp_source', sa.String(length=50), nullable=False),
        sa.Column('window_key', sa.String(length=32), nullable=True),
        sa.Column('transaction_date', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('user_id', 'xp_source', 'window_key', name='uq_xp_transactions_window'),
        sa.CheckConstraint('xp_amount > 0', name='ck_xp_transactions_amount'),
    )
    op.create_index('ix_xp_transactions_user_id', 'xp_transactions', ['user_id'])
    op.create_index('ix_xp_transactions_xp_source', 'xp_transactions', ['xp_source'])
    op.create_index('ix_xp_transactions_transaction_date', 'xp_transactions', ['transaction_date'])
    op.create_index(
        'idx_xp_transactions_user_source_date', 'xp_transactions',
        ['user_id', 'xp_source', 'transaction_date'],
    )

    op.create_table(
        'user_stats',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('total_xp', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('strength_level', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('sessions_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sessions_available', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('consistency_score', sa.Numeric(5, 2, asdecimal=False), nullable=False, server_default='0'),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            'consistency_score >= 0 AND consistency_score <= 100', name='ck_user_stats_consistency'
        ),
    )
    op.create_index('idx_user_stats_strength', 'user_stats', ['strength_level', 'total_xp'])
    op.create_index('idx_user_stats_consistency', 'user_stats', ['consistency_score'])

    op.create_table(
        'progress_trackings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('test_type', sa.String(length=50), nullable=False),
        sa.Column('baseline_value', sa.Numeric(6, 1, asdecimal=False), nullable=False),
        sa.Column('current_value', sa.Numeric(6, 1, asdecimal=False), nullable=False),
        sa.Column('percentage_increase', sa.Numeric(8, 2, asdecimal=False), nullable=True),
        sa.Column('last_updated', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'test_type', name='uq_progress_trackings_user_type'),
    )
    op.create_index('ix_progress_trackings_user_id', 'progress_trackings', ['user_id'])


def downgrade():
    op.drop_table('progress_trackings')
    op.drop_table('user_stats')
    op.drop_table('xp_transactions')
    op.drop_table('test_results')
    op.drop_table('training_results')
    op.drop_table('training_sessions')
    op.drop_table('blocks')
    op.drop_table('users')
