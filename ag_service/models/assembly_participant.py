# ag_service/models/assembly_participant.py
"""
Assembly roster imported from CSV: executive board (eb), regional
coordinators (cr) and local committees (comite).
"""
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class AssemblyParticipant(Base):
    __tablename__ = "assembly_participants"

    id = Column(String, primary_key=True, default=lambda: f"part_{uuid.uuid4().hex[:12]}")
    assembly_id = Column(
        String, ForeignKey("assemblies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(10), nullable=False)  # eb, cr, comite
    participant_id = Column(String, nullable=False, comment="External id from the import")
    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    status = Column(String, nullable=True, comment="Pleno / Não-pleno for committees")
    escola = Column(String, nullable=True)
    regional = Column(String, nullable=True)
    cidade = Column(String, nullable=True)
    uf = Column(String(2), nullable=True)
    ag_filiacao = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("assembly_id", "participant_id", name="uq_assembly_participant"),
        Index("ix_assembly_participants_assembly_type", "assembly_id", "type"),
    )

    def __repr__(self):
        return f"<AssemblyParticipant(id={self.id}, type={self.type}, name={self.name})>"
