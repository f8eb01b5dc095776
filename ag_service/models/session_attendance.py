# ag_service/models/session_attendance.py
"""
Session Attendance Model - one row per participant per session.

Rows are seeded with ``not-counting`` when a plenária or sessão is created,
or created lazily when an operator marks someone or a participant checks in.
Participant fields are denormalized so reports survive roster changes.
"""
import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, UniqueConstraint

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class SessionAttendance(Base):
    __tablename__ = "ag_session_attendance"

    id = Column(String, primary_key=True, default=lambda: f"att_{uuid.uuid4().hex[:12]}")
    session_id = Column(String, ForeignKey("ag_sessions.id"), nullable=False, index=True)
    # Copied from the session; null for standalone sessions
    assembly_id = Column(String, nullable=True)

    participant_id = Column(String, nullable=False)
    participant_type = Column(String(20), nullable=False)
    participant_name = Column(String, nullable=False)
    participant_role = Column(String, nullable=True)
    participant_status = Column(String, nullable=True, comment="Roster status snapshot")
    comite_local = Column(String, nullable=True)
    escola = Column(String, nullable=True)
    regional = Column(String, nullable=True)
    cidade = Column(String, nullable=True)
    uf = Column(String(2), nullable=True)

    attendance = Column(String(20), nullable=False, default="not-counting")
    marked_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    marked_by = Column(String, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_updated_by = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "session_id",
            "participant_id",
            "participant_type",
            name="uq_session_attendance_participant",
        ),
        # For a user's attendance across an assembly
        Index("ix_session_attendance_assembly_participant", "assembly_id", "participant_id"),
    )

    def __repr__(self):
        return (
            f"<SessionAttendance(id={self.id}, session={self.session_id}, "
            f"participant={self.participant_id}, attendance={self.attendance})>"
        )
