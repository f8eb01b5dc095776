# ag_service/api/v1/endpoints/sessions.py
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.core.exceptions import NotFoundError
from ag_service.db.session import get_db
from ag_service.schemas.attendance import (
    AttendanceMark,
    AttendanceRecordId,
    EnrichedSession,
    SelfCheckIn,
    SelfCheckInResult,
)
from ag_service.schemas.session import (
    AGSession,
    AGSessionCreate,
    AGSessionCreated,
    AGSessionWithStats,
    OrganizedAttendance,
    UserAttendanceStats,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services.session_service import engine as attendance_engine

router = APIRouter(tags=["AG Sessions"])


@router.post(
    "/ag-sessions", response_model=AGSessionCreated, status_code=status.HTTP_201_CREATED
)
def create_session(
    session_in: AGSessionCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    session_id = attendance_engine.create_session(
        db,
        name=session_in.name,
        type=session_in.type,
        created_by=current_user.sub,
        assembly_id=session_in.assembly_id,
    )
    return AGSessionCreated(id=session_id)


@router.get("/ag-sessions/standalone", response_model=List[AGSession])
def list_standalone_sessions(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.get_standalone_sessions(db)


@router.get("/assemblies/{assembly_id}/ag-sessions", response_model=List[AGSession])
def list_sessions(
    assembly_id: str,
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.list_sessions(db, assembly_id=assembly_id, active_only=active_only)


@router.get("/ag-sessions/{session_id}", response_model=AGSessionWithStats)
def get_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    result = attendance_engine.get_session_with_stats(db, session_id=session_id)
    if result is None:
        raise NotFoundError("Session", session_id)
    return result


@router.delete("/ag-sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    attendance_engine.delete_session(db, session_id=session_id, deleted_by=current_user.sub)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/ag-sessions/{session_id}/archive", response_model=AGSession)
def archive_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.archive_session(
        db, session_id=session_id, archived_by=current_user.sub
    )


@router.post("/ag-sessions/{session_id}/reopen", response_model=AGSession)
def reopen_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.reopen_session(
        db, session_id=session_id, reopened_by=current_user.sub
    )


@router.get("/ag-sessions/{session_id}/attendance", response_model=OrganizedAttendance)
def get_session_attendance(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.get_session_attendance(db, session_id=session_id)


@router.post("/ag-sessions/{session_id}/attendance", response_model=AttendanceRecordId)
def mark_attendance(
    session_id: str,
    mark_in: AttendanceMark,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    record_id = attendance_engine.mark_attendance(
        db,
        session_id=session_id,
        participant_id=mark_in.participant_id,
        participant_type=mark_in.participant_type,
        participant_name=mark_in.participant_name,
        participant_role=mark_in.participant_role,
        attendance=mark_in.attendance,
        marked_by=current_user.sub,
    )
    return AttendanceRecordId(id=record_id)


@router.post("/ag-sessions/{session_id}/check-in", response_model=SelfCheckInResult)
def self_check_in(
    session_id: str,
    check_in: SelfCheckIn,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Participant self check-in. Always answers 200; failures are reported
    in the body so the participant sees a readable message.
    """
    return attendance_engine.mark_self_attendance(
        db,
        session_id=session_id,
        participant_id=check_in.participant_id or current_user.sub,
        participant_name=check_in.participant_name or current_user.name or current_user.sub,
        participant_type=check_in.participant_type,
    )


@router.get("/ag-sessions/{session_id}/enriched", response_model=EnrichedSession)
def get_enriched_session(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.get_session_with_enriched_data(db, session_id=session_id)


@router.get(
    "/assemblies/{assembly_id}/attendance/{user_id}", response_model=UserAttendanceStats
)
def get_user_attendance_stats(
    assembly_id: str,
    user_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return attendance_engine.get_user_attendance_stats(
        db, assembly_id=assembly_id, user_id=user_id
    )
