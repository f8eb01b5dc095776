# ag_service/models/registration.py
"""
A participant's registration to an assembly.

Besides the status lifecycle it stores the form the participant filled in
(personal data, additional info) and payment receipt metadata. Receipt
files themselves live in external storage; only their metadata is kept.
"""
import uuid
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class Registration(Base):
    __tablename__ = "ag_registrations"

    id = Column(String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}")
    assembly_id = Column(
        String, ForeignKey("assemblies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    modality_id = Column(
        String, ForeignKey("registration_modalities.id"), nullable=True, index=True
    )

    participant_type = Column(String, nullable=False, default="individual")
    participant_id = Column(String, nullable=False, index=True, comment="User id")
    participant_name = Column(String, nullable=False)
    participant_role = Column(String, nullable=True)
    participant_status = Column(String, nullable=True)

    status = Column(String(20), nullable=False, default="pending")
    registered_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    registered_by = Column(String, nullable=False)

    # Contact and personal data
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email_solar = Column(String, nullable=True)
    data_nascimento = Column(String, nullable=True)
    cpf = Column(String, nullable=True)
    nome_cracha = Column(String, nullable=True)
    celular = Column(String, nullable=True)
    escola = Column(String, nullable=True)
    regional = Column(String, nullable=True)
    cidade = Column(String, nullable=True)
    uf = Column(String(2), nullable=True)
    ag_filiacao = Column(String, nullable=True)
    comite_local = Column(String, nullable=True)
    comite_aspirante = Column(String, nullable=True)
    autorizacao_compartilhamento = Column(Boolean, nullable=True)

    # Additional info
    experiencia_anterior = Column(Text, nullable=True)
    motivacao = Column(Text, nullable=True)
    expectativas = Column(Text, nullable=True)
    dieta_restricoes = Column(Text, nullable=True)
    alergias = Column(Text, nullable=True)
    medicamentos = Column(Text, nullable=True)
    necessidades_especiais = Column(Text, nullable=True)
    restricao_quarto = Column(Text, nullable=True)
    pronomes = Column(String, nullable=True)
    contato_emergencia_nome = Column(String, nullable=True)
    contato_emergencia_telefone = Column(String, nullable=True)
    outras_observacoes = Column(Text, nullable=True)
    participacao_comites = Column(JSON, nullable=True)
    interesse_voluntariado = Column(Boolean, nullable=True)

    # Payment
    is_payment_exempt = Column(Boolean, nullable=False, default=False)
    payment_exempt_reason = Column(Text, nullable=True)
    receipt_file_name = Column(String, nullable=True)
    receipt_file_type = Column(String, nullable=True)
    receipt_file_size = Column(Integer, nullable=True)
    receipt_storage_id = Column(String, nullable=True)
    receipt_uploaded_at = Column(DateTime(timezone=True), nullable=True)
    receipt_uploaded_by = Column(String, nullable=True)

    # Review
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    reviewed_by = Column(String, nullable=True)
    review_notes = Column(Text, nullable=True)

    # Resubmission after rejection
    resubmitted_at = Column(DateTime(timezone=True), nullable=True)
    resubmission_note = Column(Text, nullable=True)

    __table_args__ = (
        Index("ix_ag_registrations_assembly_status", "assembly_id", "status"),
        Index("ix_ag_registrations_assembly_participant", "assembly_id", "participant_id"),
    )

    def __repr__(self):
        return f"<Registration(id={self.id}, participant={self.participant_id}, status={self.status})>"
