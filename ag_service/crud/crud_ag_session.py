# ag_service/crud/crud_ag_session.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.ag_session import AGSession
from ag_service.schemas.session import AGSessionCreate


class CRUDAGSession(CRUDBase[AGSession, AGSessionCreate, AGSessionCreate]):
    def get_by_assembly(
        self, db: Session, *, assembly_id: str, active_only: bool = False
    ) -> List[AGSession]:
        query = db.query(self.model).filter(self.model.assembly_id == assembly_id)
        if active_only:
            query = query.filter(self.model.status == "active")
        return query.order_by(self.model.created_at.desc()).all()

    def get_standalone(self, db: Session) -> List[AGSession]:
        return (
            db.query(self.model)
            .filter(self.model.assembly_id.is_(None))
            .order_by(self.model.created_at.desc())
            .all()
        )

    def get_by_ids(self, db: Session, *, ids: List[str]) -> List[AGSession]:
        if not ids:
            return []
        return db.query(self.model).filter(self.model.id.in_(ids)).all()

    def create_active(
        self,
        db: Session,
        *,
        name: str,
        type: str,
        created_by: str,
        assembly_id: Optional[str] = None,
    ) -> AGSession:
        db_obj = self.model(
            assembly_id=assembly_id,
            name=name,
            type=type,
            status="active",
            created_by=created_by,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove_by_assembly(self, db: Session, *, assembly_id: str) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.assembly_id == assembly_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


ag_session = CRUDAGSession(AGSession)
