# ag_service/models/registration_modality.py
import uuid
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from ag_service.db.base_class import Base
from ag_service.utils.time import utcnow


class RegistrationModality(Base):
    __tablename__ = "registration_modalities"

    id = Column(String, primary_key=True, default=lambda: f"mod_{uuid.uuid4().hex[:12]}")
    assembly_id = Column(
        String, ForeignKey("assemblies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False, default=0, comment="Price in centavos")
    max_participants = Column(Integer, nullable=True, comment="Null means unlimited")
    is_active = Column(Boolean, nullable=False, default=True)
    order = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("assembly_id", "order", name="uq_modality_assembly_order"),
    )

    def __repr__(self):
        return f"<RegistrationModality(id={self.id}, name={self.name}, order={self.order})>"
