# ag_service/models/assembly.py
import uuid
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class Assembly(Base):
    __tablename__ = "assemblies"

    id = Column(String, primary_key=True, default=lambda: f"asm_{uuid.uuid4().hex[:12]}")
    name = Column(String, nullable=False)
    type = Column(String(8), nullable=False)  # AG, AGE
    location = Column(String, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default="active", index=True)

    registration_open = Column(Boolean, nullable=False, default=True)
    registration_deadline = Column(DateTime(timezone=True), nullable=True)
    max_participants = Column(Integer, nullable=True)
    description = Column(Text, nullable=True)
    payment_required = Column(Boolean, nullable=False, default=False)
    # Highest modality order ever handed out; orders are never reused
    modality_order_counter = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_updated_by = Column(String, nullable=False)

    def __repr__(self):
        return f"<Assembly(id={self.id}, name={self.name}, type={self.type}, status={self.status})>"
