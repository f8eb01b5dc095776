# ag_service/models/qr_reader.py
import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class QRReader(Base):
    """
    A registered QR check-in station. The token in its URL is the only
    credential the scanning device holds. Readers bound to a session mark
    attendance there; unbound readers feed the standalone roll call.
    """
    __tablename__ = "qr_readers"

    id = Column(String, primary_key=True, default=lambda: f"qr_{uuid.uuid4().hex[:12]}")
    name = Column(String, nullable=False)
    token = Column(String(32), nullable=False, unique=True, index=True)
    session_id = Column(
        String, ForeignKey("ag_sessions.id", ondelete="CASCADE"), nullable=True
    )
    assembly_id = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String, nullable=False)

    __table_args__ = (Index("ix_qr_readers_active_session", "is_active", "session_id"),)

    def __repr__(self):
        return f"<QRReader(id={self.id}, name={self.name}, session_id={self.session_id})>"
