# ag_service/models/roll_call.py
import uuid
from sqlalchemy import Column, DateTime, String, UniqueConstraint

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class RollCallEntry(Base):
    """
    A row of the standalone roll call ("chamada avulsa"), kept outside of
    any assembly or session.
    """
    __tablename__ = "roll_call_entries"

    id = Column(String, primary_key=True, default=lambda: f"call_{uuid.uuid4().hex[:12]}")
    type = Column(String(10), nullable=False)  # eb, cr, comite
    member_id = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    status = Column(String, nullable=True)
    attendance = Column(String(20), nullable=False, default="not-counting")
    escola = Column(String, nullable=True)
    regional = Column(String, nullable=True)
    cidade = Column(String, nullable=True)
    uf = Column(String(2), nullable=True)
    ag_filiacao = Column(String, nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_updated_by = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("type", "member_id", name="uq_roll_call_member"),
    )
