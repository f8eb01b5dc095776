"""Create AG session, session attendance and roll call tables

Revision ID: a002_create_session_tables
Revises: a001_create_assembly_tables
Create Date: 2026-10-17

Attendance rows are unique per (session, participant, participant type)
so concurrent marks for the same person cannot create duplicates.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a002_create_session_tables'
down_revision = 'a001_create_assembly_tables'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'ag_sessions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assembly_id', sa.String(), sa.ForeignKey('assemblies.id', ondelete='CASCADE'), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(), nullable=False),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('archived_by', sa.String(), nullable=True),
    )
    op.create_index('ix_ag_sessions_assembly_status', 'ag_sessions', ['assembly_id', 'status'])
    op.create_index('ix_ag_sessions_assembly_created', 'ag_sessions', ['assembly_id', 'created_at'])

    op.create_table(
        'ag_session_attendance',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('session_id', sa.String(), sa.ForeignKey('ag_sessions.id'), nullable=False),
        sa.Column('assembly_id', sa.String(), nullable=True),
        sa.Column('participant_id', sa.String(), nullable=False),
        sa.Column('participant_type', sa.String(20), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('participant_role', sa.String(), nullable=True),
        sa.Column('participant_status', sa.String(), nullable=True),
        sa.Column('comite_local', sa.String(), nullable=True),
        sa.Column('escola', sa.String(), nullable=True),
        sa.Column('regional', sa.String(), nullable=True),
        sa.Column('cidade', sa.String(), nullable=True),
        sa.Column('uf', sa.String(2), nullable=True),
        sa.Column('attendance', sa.String(20), nullable=False, server_default='not-counting'),
        sa.Column('marked_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('marked_by', sa.String(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_updated_by', sa.String(), nullable=False),
    )

    # One row per participant per session
    op.create_unique_constraint(
        'uq_session_attendance_participant',
        'ag_session_attendance',
        ['session_id', 'participant_id', 'participant_type'],
    )
    op.create_index('ix_ag_session_attendance_session_id', 'ag_session_attendance', ['session_id'])
    op.create_index(
        'ix_session_attendance_assembly_participant',
        'ag_session_attendance',
        ['assembly_id', 'participant_id'],
    )

    op.create_table(
        'roll_call_entries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('member_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('attendance', sa.String(20), nullable=False, server_default='not-counting'),
        sa.Column('escola', sa.String(), nullable=True),
        sa.Column('regional', sa.String(), nullable=True),
        sa.Column('cidade', sa.String(), nullable=True),
        sa.Column('uf', sa.String(2), nullable=True),
        sa.Column('ag_filiacao', sa.String(), nullable=True),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_updated_by', sa.String(), nullable=False),
        sa.UniqueConstraint('type', 'member_id', name='uq_roll_call_member'),
    )


def downgrade() -> None:
    op.drop_table('roll_call_entries')
    op.drop_index('ix_session_attendance_assembly_participant', table_name='ag_session_attendance')
    op.drop_index('ix_ag_session_attendance_session_id', table_name='ag_session_attendance')
    op.drop_constraint('uq_session_attendance_participant', 'ag_session_attendance', type_='unique')
    op.drop_table('ag_session_attendance')
    op.drop_index('ix_ag_sessions_assembly_created', table_name='ag_sessions')
    op.drop_index('ix_ag_sessions_assembly_status', table_name='ag_sessions')
    op.drop_table('ag_sessions')
