# ag_service/services/qr_reader_service.py
"""
QR check-in readers.

An operator registers a reader and opens ``/leitor-qr/<token>`` on the
scanning device. Each scan marks the badge holder present, either in the
reader's session or, for readers without a session, in the standalone
roll call.
"""
import logging
import secrets
from typing import List, Optional

from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import AttendanceState, ParticipantType
from ag_service.core.exceptions import NotFoundError, ValidationError
from ag_service.models.qr_reader import QRReader
from ag_service.schemas.qr_reader import QRScan, QRScanResult
from ag_service.schemas.roll_call import RollCallEntryIn
from ag_service.services import roll_call_service
from ag_service.services.session_service import engine as attendance_engine

logger = logging.getLogger(__name__)

# 12 random bytes encode to 16 URL-safe characters
TOKEN_BYTES = 12


def generate_token() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


def create_reader(
    db: Session, *, name: str, created_by: str, session_id: Optional[str] = None
) -> QRReader:
    assembly_id = None
    if session_id:
        session = attendance_engine.get_session(db, session_id=session_id)
        assembly_id = session.assembly_id
    reader = crud.qr_reader.create(
        db,
        obj_in={
            "name": name,
            "token": generate_token(),
            "session_id": session_id,
            "assembly_id": assembly_id,
            "is_active": True,
            "created_by": created_by,
        },
    )
    logger.info(f"QR reader {reader.id} ('{name}') created by {created_by}")
    return reader


def list_active(db: Session, *, session_id: Optional[str] = None) -> List[QRReader]:
    return crud.qr_reader.get_active(db, session_id=session_id)


def get_by_token(db: Session, *, token: str) -> QRReader:
    reader = crud.qr_reader.get_by_token(db, token=token)
    if reader is None:
        raise NotFoundError("QR reader", token)
    return reader


def remove_reader(db: Session, *, reader_id: str, removed_by: str) -> None:
    if crud.qr_reader.remove(db, id=reader_id) is None:
        raise NotFoundError("QR reader", reader_id)
    logger.info(f"QR reader {reader_id} removed by {removed_by}")


def clear_all(db: Session, *, cleared_by: str) -> int:
    removed = crud.qr_reader.remove_active(db)
    logger.info(f"{removed} QR readers cleared by {cleared_by}")
    return removed


def scan(db: Session, *, token: str, payload: QRScan) -> QRScanResult:
    """Mark the scanned participant present through the reader behind ``token``."""
    reader = get_by_token(db, token=token)
    marked_by = f"qr-reader-{reader.name}"

    if reader.session_id:
        record_id = attendance_engine.mark_attendance(
            db,
            session_id=reader.session_id,
            participant_id=payload.participant_id,
            participant_type=payload.participant_type,
            participant_name=payload.participant_name,
            participant_role=payload.participant_role,
            attendance=AttendanceState.PRESENT,
            marked_by=marked_by,
        )
        return QRScanResult(reader_id=reader.id, session_id=reader.session_id, record_id=record_id)

    if payload.participant_type.value not in ParticipantType.roster_types():
        raise ValidationError(
            "Readers without a session only accept eb, cr or comite badges",
            field="participant_type",
        )
    entry = roll_call_service.upsert_entry(
        db,
        entry=RollCallEntryIn(
            type=payload.participant_type.value,
            member_id=payload.participant_id,
            name=payload.participant_name,
            role=payload.participant_role,
            attendance=AttendanceState.PRESENT,
        ),
        updated_by=marked_by,
    )
    return QRScanResult(reader_id=reader.id, record_id=entry.id)
