# ag_service/models/ag_config.py
import uuid
from sqlalchemy import Boolean, Column, DateTime, String, Text

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class AGConfig(Base):
    """Global registration settings. There is at most one row."""
    __tablename__ = "ag_configs"

    id = Column(String, primary_key=True, default=lambda: f"agcfg_{uuid.uuid4().hex[:12]}")
    registration_enabled = Column(Boolean, nullable=False, default=True)
    auto_approval = Column(Boolean, nullable=False, default=False)
    code_of_conduct_url = Column(String, nullable=True)
    payment_info = Column(Text, nullable=True)
    payment_instructions = Column(Text, nullable=True)
    bank_details = Column(Text, nullable=True)
    pix_key = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_by = Column(String, nullable=False)
