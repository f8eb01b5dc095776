# ag_service/crud/crud_attendance.py
"""
Attendance rows for AG sessions.

Upserts go through ``find_or_create``. The table carries a unique
constraint on (session_id, participant_id, participant_type), so when two
requests race to insert the same participant the loser's IntegrityError
is swallowed and the winner's row is returned instead.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ag_service.models.session_attendance import SessionAttendance
from ag_service.utils.time import utcnow

logger = logging.getLogger(__name__)


class CRUDAttendance:
    def __init__(self):
        self.model = SessionAttendance

    def get(self, db: Session, id: str) -> Optional[SessionAttendance]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_by_session(self, db: Session, *, session_id: str) -> List[SessionAttendance]:
        return (
            db.query(self.model)
            .filter(self.model.session_id == session_id)
            .order_by(self.model.participant_name)
            .all()
        )

    def find(
        self, db: Session, *, session_id: str, participant_id: str, participant_type: str
    ) -> Optional[SessionAttendance]:
        return (
            db.query(self.model)
            .filter(
                self.model.session_id == session_id,
                self.model.participant_id == participant_id,
                self.model.participant_type == participant_type,
            )
            .first()
        )

    def find_by_participant(
        self, db: Session, *, session_id: str, participant_id: str
    ) -> Optional[SessionAttendance]:
        return (
            db.query(self.model)
            .filter(
                self.model.session_id == session_id,
                self.model.participant_id == participant_id,
            )
            .first()
        )

    def get_by_assembly_and_participants(
        self,
        db: Session,
        *,
        assembly_id: str,
        participant_ids: List[str],
        participant_type: Optional[str] = None,
    ) -> List[SessionAttendance]:
        if not participant_ids:
            return []
        query = db.query(self.model).filter(
            self.model.assembly_id == assembly_id,
            self.model.participant_id.in_(participant_ids),
        )
        if participant_type:
            query = query.filter(self.model.participant_type == participant_type)
        return query.all()

    def find_or_create(
        self,
        db: Session,
        *,
        session_id: str,
        participant_id: str,
        participant_type: str,
        defaults: Dict[str, Any],
        match_type: bool = True,
    ) -> Tuple[SessionAttendance, bool]:
        """
        Return the existing row for the participant or insert a new one.

        With ``match_type=False`` the lookup ignores the participant type
        (self check-in matches on the person alone).
        """
        if match_type:
            existing = self.find(
                db,
                session_id=session_id,
                participant_id=participant_id,
                participant_type=participant_type,
            )
        else:
            existing = self.find_by_participant(
                db, session_id=session_id, participant_id=participant_id
            )
        if existing:
            return existing, False

        db_obj = self.model(
            session_id=session_id,
            participant_id=participant_id,
            participant_type=participant_type,
            **defaults,
        )
        try:
            db.add(db_obj)
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Concurrent insert for participant {participant_id} in session "
                f"{session_id}, using the existing row"
            )
            winner = self.find(
                db,
                session_id=session_id,
                participant_id=participant_id,
                participant_type=participant_type,
            )
            if winner is None:
                raise
            return winner, False
        db.refresh(db_obj)
        return db_obj, True

    def bulk_create(self, db: Session, *, rows: List[Dict[str, Any]]) -> int:
        db.add_all([self.model(**row) for row in rows])
        db.commit()
        return len(rows)

    def set_attendance(
        self, db: Session, *, db_obj: SessionAttendance, attendance: str, updated_by: str
    ) -> SessionAttendance:
        db_obj.attendance = attendance
        db_obj.last_updated = utcnow()
        db_obj.last_updated_by = updated_by
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove_by_session(self, db: Session, *, session_id: str) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.session_id == session_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted

    def remove_by_sessions(self, db: Session, *, session_ids: List[str]) -> int:
        if not session_ids:
            return 0
        deleted = (
            db.query(self.model)
            .filter(self.model.session_id.in_(session_ids))
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


attendance = CRUDAttendance()
