# ag_service/crud/crud_roll_call.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.roll_call import RollCallEntry
from ag_service.schemas.roll_call import RollCallEntryIn
from ag_service.utils.time import utcnow


class CRUDRollCall(CRUDBase[RollCallEntry, RollCallEntryIn, RollCallEntryIn]):
    def get_by_member(self, db: Session, *, type: str, member_id: str) -> Optional[RollCallEntry]:
        return (
            db.query(self.model)
            .filter(self.model.type == type, self.model.member_id == member_id)
            .first()
        )

    def list_entries(self, db: Session, *, type: Optional[str] = None) -> List[RollCallEntry]:
        query = db.query(self.model)
        if type:
            query = query.filter(self.model.type == type)
        return query.order_by(self.model.name).all()

    def bulk_create(self, db: Session, *, entries: List[RollCallEntryIn], updated_by: str) -> int:
        now = utcnow()
        db.add_all(
            [
                self.model(**e.model_dump(mode="json"), last_updated=now, last_updated_by=updated_by)
                for e in entries
            ]
        )
        db.commit()
        return len(entries)

    def set_all_attendance(self, db: Session, *, attendance: str, updated_by: str) -> int:
        updated = db.query(self.model).update(
            {
                self.model.attendance: attendance,
                self.model.last_updated: utcnow(),
                self.model.last_updated_by: updated_by,
            },
            synchronize_session=False,
        )
        db.commit()
        return updated

    def remove_all(self, db: Session) -> int:
        deleted = db.query(self.model).delete(synchronize_session=False)
        db.commit()
        return deleted


roll_call = CRUDRollCall(RollCallEntry)
