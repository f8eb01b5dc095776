# ag_service/crud/crud_registration.py
from typing import Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.constants import ACTIVE_EXCLUDED_STATUSES
from ag_service.models.registration import Registration
from ag_service.schemas.registration import RegistrationForm


class CRUDRegistration(CRUDBase[Registration, RegistrationForm, RegistrationForm]):
    def get_by_assembly(
        self, db: Session, *, assembly_id: str, status: Optional[str] = None
    ) -> List[Registration]:
        query = db.query(self.model).filter(self.model.assembly_id == assembly_id)
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.registered_at).all()

    def get_by_assembly_and_statuses(
        self, db: Session, *, assembly_id: str, statuses: List[str]
    ) -> List[Registration]:
        return (
            db.query(self.model)
            .filter(self.model.assembly_id == assembly_id, self.model.status.in_(statuses))
            .order_by(self.model.registered_at)
            .all()
        )

    def get_by_assembly_and_participant(
        self, db: Session, *, assembly_id: str, participant_id: str
    ) -> List[Registration]:
        """All registrations a user holds in an assembly, any status."""
        return (
            db.query(self.model)
            .filter(
                self.model.assembly_id == assembly_id,
                self.model.participant_id == participant_id,
            )
            .order_by(self.model.registered_at.desc())
            .all()
        )

    def get_by_modality(self, db: Session, *, modality_id: str) -> List[Registration]:
        return db.query(self.model).filter(self.model.modality_id == modality_id).all()

    def get_by_ids(self, db: Session, *, ids: List[str]) -> List[Registration]:
        return db.query(self.model).filter(self.model.id.in_(ids)).all()

    def count_active_by_modality(
        self, db: Session, *, modality_id: str, exclude_id: Optional[str] = None
    ) -> int:
        query = db.query(self.model).filter(
            self.model.modality_id == modality_id,
            self.model.status.notin_(list(ACTIVE_EXCLUDED_STATUSES)),
        )
        if exclude_id:
            query = query.filter(self.model.id != exclude_id)
        return query.count()

    def count_active_by_assembly(self, db: Session, *, assembly_id: str) -> int:
        return (
            db.query(self.model)
            .filter(
                self.model.assembly_id == assembly_id,
                self.model.status.notin_(list(ACTIVE_EXCLUDED_STATUSES)),
            )
            .count()
        )

    def count_by_status(self, db: Session, *, assembly_id: str) -> Dict[str, int]:
        rows = (
            db.query(self.model.status, func.count(self.model.id))
            .filter(self.model.assembly_id == assembly_id)
            .group_by(self.model.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_by_type(self, db: Session, *, assembly_id: str) -> Dict[str, int]:
        rows = (
            db.query(self.model.participant_type, func.count(self.model.id))
            .filter(self.model.assembly_id == assembly_id)
            .group_by(self.model.participant_type)
            .all()
        )
        return {type_: count for type_, count in rows}

    def create_from_form(
        self,
        db: Session,
        *,
        form: RegistrationForm,
        assembly_id: str,
        participant_id: str,
        status: str,
        review_fields: Optional[dict] = None,
    ) -> Registration:
        db_obj = self.model(
            **form.model_dump(),
            **(review_fields or {}),
            assembly_id=assembly_id,
            participant_id=participant_id,
            registered_by=participant_id,
            status=status,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove_many(self, db: Session, *, ids: List[str]) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.id.in_(ids))
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted

    def remove_by_assembly(self, db: Session, *, assembly_id: str) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.assembly_id == assembly_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


registration = CRUDRegistration(Registration)
