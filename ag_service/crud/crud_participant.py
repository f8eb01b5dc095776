# ag_service/crud/crud_participant.py
from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.assembly_participant import AssemblyParticipant
from ag_service.schemas.assembly import ParticipantIn


class CRUDParticipant(CRUDBase[AssemblyParticipant, ParticipantIn, ParticipantIn]):
    def get_by_assembly(
        self, db: Session, *, assembly_id: str, types: Optional[Iterable[str]] = None
    ) -> List[AssemblyParticipant]:
        query = db.query(self.model).filter(self.model.assembly_id == assembly_id)
        if types:
            query = query.filter(self.model.type.in_(list(types)))
        return query.order_by(self.model.name).all()

    def bulk_create(
        self, db: Session, *, assembly_id: str, participants: List[ParticipantIn]
    ) -> int:
        rows = [self.model(**p.model_dump(), assembly_id=assembly_id) for p in participants]
        db.add_all(rows)
        db.commit()
        return len(rows)

    def count_by_type(self, db: Session, *, assembly_id: str) -> Dict[str, int]:
        rows = (
            db.query(self.model.type, func.count(self.model.id))
            .filter(self.model.assembly_id == assembly_id)
            .group_by(self.model.type)
            .all()
        )
        return {type_: count for type_, count in rows}

    def remove_by_assembly(self, db: Session, *, assembly_id: str) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.assembly_id == assembly_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


participant = CRUDParticipant(AssemblyParticipant)
