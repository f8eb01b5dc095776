"""Create assembly, roster, modality, registration and config tables

Revision ID: a001_create_assembly_tables
Revises:
Create Date: 2026-10-17

Assemblies own a roster imported from CSV, pricing modalities and the
registrations participants submit. ag_configs holds the single row of
global registration settings.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a001_create_assembly_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'assemblies',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('type', sa.String(8), nullable=False),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('registration_open', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('registration_deadline', sa.DateTime(timezone=True), nullable=True),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('payment_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('modality_order_counter', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_updated_by', sa.String(), nullable=False),
    )
    op.create_index('ix_assemblies_status', 'assemblies', ['status'])

    op.create_table(
        'assembly_participants',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assembly_id', sa.String(), sa.ForeignKey('assemblies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('participant_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=True),
        sa.Column('status', sa.String(), nullable=True),
        sa.Column('escola', sa.String(), nullable=True),
        sa.Column('regional', sa.String(), nullable=True),
        sa.Column('cidade', sa.String(), nullable=True),
        sa.Column('uf', sa.String(2), nullable=True),
        sa.Column('ag_filiacao', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('assembly_id', 'participant_id', name='uq_assembly_participant'),
    )
    op.create_index('ix_assembly_participants_assembly_id', 'assembly_participants', ['assembly_id'])
    op.create_index(
        'ix_assembly_participants_assembly_type', 'assembly_participants', ['assembly_id', 'type']
    )

    op.create_table(
        'registration_modalities',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assembly_id', sa.String(), sa.ForeignKey('assemblies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('max_participants', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(), nullable=False),
        sa.UniqueConstraint('assembly_id', 'order', name='uq_modality_assembly_order'),
    )
    op.create_index('ix_registration_modalities_assembly_id', 'registration_modalities', ['assembly_id'])

    op.create_table(
        'ag_registrations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('assembly_id', sa.String(), sa.ForeignKey('assemblies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('modality_id', sa.String(), sa.ForeignKey('registration_modalities.id'), nullable=True),
        sa.Column('participant_type', sa.String(), nullable=False, server_default='individual'),
        sa.Column('participant_id', sa.String(), nullable=False),
        sa.Column('participant_name', sa.String(), nullable=False),
        sa.Column('participant_role', sa.String(), nullable=True),
        sa.Column('participant_status', sa.String(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('registered_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('registered_by', sa.String(), nullable=False),
        # Contact and personal data
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('email_solar', sa.String(), nullable=True),
        sa.Column('data_nascimento', sa.String(), nullable=True),
        sa.Column('cpf', sa.String(), nullable=True),
        sa.Column('nome_cracha', sa.String(), nullable=True),
        sa.Column('celular', sa.String(), nullable=True),
        sa.Column('escola', sa.String(), nullable=True),
        sa.Column('regional', sa.String(), nullable=True),
        sa.Column('cidade', sa.String(), nullable=True),
        sa.Column('uf', sa.String(2), nullable=True),
        sa.Column('ag_filiacao', sa.String(), nullable=True),
        sa.Column('comite_local', sa.String(), nullable=True),
        sa.Column('comite_aspirante', sa.String(), nullable=True),
        sa.Column('autorizacao_compartilhamento', sa.Boolean(), nullable=True),
        # Additional info
        sa.Column('experiencia_anterior', sa.Text(), nullable=True),
        sa.Column('motivacao', sa.Text(), nullable=True),
        sa.Column('expectativas', sa.Text(), nullable=True),
        sa.Column('dieta_restricoes', sa.Text(), nullable=True),
        sa.Column('alergias', sa.Text(), nullable=True),
        sa.Column('medicamentos', sa.Text(), nullable=True),
        sa.Column('necessidades_especiais', sa.Text(), nullable=True),
        sa.Column('restricao_quarto', sa.Text(), nullable=True),
        sa.Column('pronomes', sa.String(), nullable=True),
        sa.Column('contato_emergencia_nome', sa.String(), nullable=True),
        sa.Column('contato_emergencia_telefone', sa.String(), nullable=True),
        sa.Column('outras_observacoes', sa.Text(), nullable=True),
        sa.Column('participacao_comites', sa.JSON(), nullable=True),
        sa.Column('interesse_voluntariado', sa.Boolean(), nullable=True),
        # Payment
        sa.Column('is_payment_exempt', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_exempt_reason', sa.Text(), nullable=True),
        sa.Column('receipt_file_name', sa.String(), nullable=True),
        sa.Column('receipt_file_type', sa.String(), nullable=True),
        sa.Column('receipt_file_size', sa.Integer(), nullable=True),
        sa.Column('receipt_storage_id', sa.String(), nullable=True),
        sa.Column('receipt_uploaded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('receipt_uploaded_by', sa.String(), nullable=True),
        # Review
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reviewed_by', sa.String(), nullable=True),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('resubmitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('resubmission_note', sa.Text(), nullable=True),
    )
    op.create_index('ix_ag_registrations_assembly_id', 'ag_registrations', ['assembly_id'])
    op.create_index('ix_ag_registrations_modality_id', 'ag_registrations', ['modality_id'])
    op.create_index('ix_ag_registrations_participant_id', 'ag_registrations', ['participant_id'])
    op.create_index('ix_ag_registrations_assembly_status', 'ag_registrations', ['assembly_id', 'status'])
    op.create_index(
        'ix_ag_registrations_assembly_participant', 'ag_registrations', ['assembly_id', 'participant_id']
    )

    op.create_table(
        'ag_configs',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('registration_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('auto_approval', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('code_of_conduct_url', sa.String(), nullable=True),
        sa.Column('payment_info', sa.Text(), nullable=True),
        sa.Column('payment_instructions', sa.Text(), nullable=True),
        sa.Column('bank_details', sa.Text(), nullable=True),
        sa.Column('pix_key', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_by', sa.String(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('ag_configs')
    op.drop_index('ix_ag_registrations_assembly_participant', table_name='ag_registrations')
    op.drop_index('ix_ag_registrations_assembly_status', table_name='ag_registrations')
    op.drop_index('ix_ag_registrations_participant_id', table_name='ag_registrations')
    op.drop_index('ix_ag_registrations_modality_id', table_name='ag_registrations')
    op.drop_index('ix_ag_registrations_assembly_id', table_name='ag_registrations')
    op.drop_table('ag_registrations')
    op.drop_index('ix_registration_modalities_assembly_id', table_name='registration_modalities')
    op.drop_table('registration_modalities')
    op.drop_index('ix_assembly_participants_assembly_type', table_name='assembly_participants')
    op.drop_index('ix_assembly_participants_assembly_id', table_name='assembly_participants')
    op.drop_table('assembly_participants')
    op.drop_index('ix_assemblies_status', table_name='assemblies')
    op.drop_table('assemblies')
