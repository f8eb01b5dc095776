# ag_service/models/ag_session.py
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Index, String

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class AGSession(Base):
    """
    An attendance-taking session: a plenária, a sessão or a standalone
    (avulsa) roll call. Avulsa sessions may have no assembly.
    """
    __tablename__ = "ag_sessions"

    id = Column(String, primary_key=True, default=lambda: f"agses_{uuid.uuid4().hex[:12]}")
    assembly_id = Column(
        String, ForeignKey("assemblies.id", ondelete="CASCADE"), nullable=True
    )
    name = Column(String, nullable=False)
    type = Column(String(20), nullable=False)  # plenaria, sessao, avulsa
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String, nullable=False)
    archived_at = Column(DateTime(timezone=True), nullable=True)
    archived_by = Column(String, nullable=True)

    __table_args__ = (
        Index("ix_ag_sessions_assembly_status", "assembly_id", "status"),
        Index("ix_ag_sessions_assembly_created", "assembly_id", "created_at"),
    )

    def __repr__(self):
        return f"<AGSession(id={self.id}, name={self.name}, type={self.type}, status={self.status})>"
