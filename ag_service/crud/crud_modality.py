# ag_service/crud/crud_modality.py
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.registration_modality import RegistrationModality
from ag_service.schemas.modality import ModalityCreate, ModalityUpdate


class CRUDModality(CRUDBase[RegistrationModality, ModalityCreate, ModalityUpdate]):
    def get_by_assembly(
        self, db: Session, *, assembly_id: str, active_only: bool = False
    ) -> List[RegistrationModality]:
        query = db.query(self.model).filter(self.model.assembly_id == assembly_id)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        return query.order_by(self.model.order).all()

    def get_max_order(self, db: Session, *, assembly_id: str) -> int:
        max_order = (
            db.query(func.max(self.model.order))
            .filter(self.model.assembly_id == assembly_id)
            .scalar()
        )
        return max_order or 0

    def create_for_assembly(
        self,
        db: Session,
        *,
        obj_in: ModalityCreate,
        assembly_id: str,
        order: int,
        created_by: str,
    ) -> RegistrationModality:
        db_obj = self.model(
            **obj_in.model_dump(),
            assembly_id=assembly_id,
            order=order,
            is_active=True,
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


modality = CRUDModality(RegistrationModality)
