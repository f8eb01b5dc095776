# ag_service/schemas/session.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ag_service.constants import SessionStatus, SessionType
from ag_service.schemas.attendance import AttendanceRecord


class AGSessionCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Plenária Final"})
    type: SessionType
    assembly_id: Optional[str] = None


class AGSessionCreated(BaseModel):
    id: str


class AGSession(BaseModel):
    id: str
    assembly_id: Optional[str] = None
    name: str
    type: SessionType
    status: SessionStatus
    created_at: datetime
    created_by: str
    archived_at: Optional[datetime] = None
    archived_by: Optional[str] = None

    model_config = {"from_attributes": True}


class AttendanceCounts(BaseModel):
    total: int = 0
    present: int = 0
    absent: int = 0
    excluded: int = 0
    not_counting: int = 0


class AGSessionWithStats(BaseModel):
    session: AGSession
    stats: AttendanceCounts
    records: list[AttendanceRecord]


class OrganizedAttendance(BaseModel):
    ebs: list[AttendanceRecord] = []
    crs: list[AttendanceRecord] = []
    comites: list[AttendanceRecord] = []
    participantes: list[AttendanceRecord] = []


class UserSessionAttendance(BaseModel):
    session_id: str
    session_name: Optional[str] = None
    session_type: Optional[str] = None
    attendance: str
    attended: bool
    marked_at: Optional[datetime] = None


class UserAttendanceStats(BaseModel):
    total_sessions: int
    attended_sessions: int
    attendance_percentage: float
    sessions: list[UserSessionAttendance]
