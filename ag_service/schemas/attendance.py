# ag_service/schemas/attendance.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ag_service.constants import AttendanceState, ParticipantType


class AttendanceMark(BaseModel):
    participant_id: str
    participant_type: ParticipantType
    participant_name: str
    participant_role: Optional[str] = None
    attendance: AttendanceState


class SelfCheckIn(BaseModel):
    # Falls back to the caller's own id
    participant_id: Optional[str] = None
    participant_name: Optional[str] = None
    participant_type: ParticipantType = ParticipantType.USER


class SelfCheckInResult(BaseModel):
    success: bool
    error: Optional[str] = None
    record_id: Optional[str] = None


class AttendanceRecordId(BaseModel):
    id: str


class AttendanceRecord(BaseModel):
    id: str
    session_id: str
    assembly_id: Optional[str] = None
    participant_id: str
    participant_type: ParticipantType
    participant_name: str
    participant_role: Optional[str] = None
    participant_status: Optional[str] = None
    comite_local: Optional[str] = None
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = None
    attendance: AttendanceState
    marked_at: datetime
    marked_by: str
    last_updated: datetime
    last_updated_by: str

    model_config = {"from_attributes": True}


class RegistrationContact(BaseModel):
    """Registration fields surfaced next to a sessão attendance row."""
    registration_id: str
    email: Optional[str] = None
    celular: Optional[str] = None
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = None
    comite_local: Optional[str] = None
    modality_id: Optional[str] = None

    model_config = {"from_attributes": True}


class EnrichedAttendanceRecord(AttendanceRecord):
    registration: Optional[RegistrationContact] = None


class EnrichedSession(BaseModel):
    session_id: str
    session_name: str
    session_type: str
    records: list[EnrichedAttendanceRecord] = Field(default_factory=list)
