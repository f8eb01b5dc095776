# ag_service/crud/protocols.py
"""
Repository interfaces the session and attendance engine depends on.

The SQLAlchemy CRUD singletons in this package satisfy them; tests or
another backend can pass any object with the same methods.
"""
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from sqlalchemy.orm import Session


class AssemblyRepo(Protocol):
    def get(self, db: Session, id: Any) -> Optional[Any]: ...


class SessionRepo(Protocol):
    def get(self, db: Session, id: Any) -> Optional[Any]: ...

    def get_by_assembly(
        self, db: Session, *, assembly_id: str, active_only: bool = False
    ) -> List[Any]: ...

    def get_standalone(self, db: Session) -> List[Any]: ...

    def get_by_ids(self, db: Session, *, ids: List[str]) -> List[Any]: ...

    def create_active(
        self,
        db: Session,
        *,
        name: str,
        type: str,
        created_by: str,
        assembly_id: Optional[str] = None,
    ) -> Any: ...

    def update(self, db: Session, *, db_obj: Any, obj_in: Dict[str, Any]) -> Any: ...

    def remove(self, db: Session, *, id: Any) -> Optional[Any]: ...


class AttendanceRepo(Protocol):
    def get_by_session(self, db: Session, *, session_id: str) -> List[Any]: ...

    def find_by_participant(
        self, db: Session, *, session_id: str, participant_id: str
    ) -> Optional[Any]: ...

    def get_by_assembly_and_participants(
        self,
        db: Session,
        *,
        assembly_id: str,
        participant_ids: List[str],
        participant_type: Optional[str] = None,
    ) -> List[Any]: ...

    def find_or_create(
        self,
        db: Session,
        *,
        session_id: str,
        participant_id: str,
        participant_type: str,
        defaults: Dict[str, Any],
        match_type: bool = True,
    ) -> Tuple[Any, bool]: ...

    def bulk_create(self, db: Session, *, rows: List[Dict[str, Any]]) -> int: ...

    def set_attendance(
        self, db: Session, *, db_obj: Any, attendance: str, updated_by: str
    ) -> Any: ...

    def remove_by_session(self, db: Session, *, session_id: str) -> int: ...


class ParticipantRepo(Protocol):
    def get_by_assembly(
        self, db: Session, *, assembly_id: str, types: Optional[Iterable[str]] = None
    ) -> List[Any]: ...


class RegistrationRepo(Protocol):
    def get(self, db: Session, id: Any) -> Optional[Any]: ...

    def get_by_assembly(
        self, db: Session, *, assembly_id: str, status: Optional[str] = None
    ) -> List[Any]: ...

    def get_by_assembly_and_participant(
        self, db: Session, *, assembly_id: str, participant_id: str
    ) -> List[Any]: ...
