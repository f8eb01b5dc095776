"""Create QR check-in reader table

Revision ID: a003_create_qr_readers
Revises: a002_create_session_tables
Create Date: 2026-10-17

Readers are looked up by their URL token, which must be unique.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a003_create_qr_readers'
down_revision = 'a002_create_session_tables'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'qr_readers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('token', sa.String(32), nullable=False),
        sa.Column(
            'session_id',
            sa.String(),
            sa.ForeignKey('ag_sessions.id', ondelete='CASCADE'),
            nullable=True,
        ),
        sa.Column('assembly_id', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('created_by', sa.String(), nullable=False),
    )
    op.create_index('ix_qr_readers_token', 'qr_readers', ['token'], unique=True)
    op.create_index('ix_qr_readers_active_session', 'qr_readers', ['is_active', 'session_id'])


def downgrade() -> None:
    op.drop_index('ix_qr_readers_active_session', table_name='qr_readers')
    op.drop_index('ix_qr_readers_token', table_name='qr_readers')
    op.drop_table('qr_readers')
