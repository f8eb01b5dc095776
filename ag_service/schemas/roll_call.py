# ag_service/schemas/roll_call.py
from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime

from ag_service.constants import AttendanceState


class RollCallEntryIn(BaseModel):
    type: Literal["eb", "cr", "comite"]
    member_id: str
    name: str
    role: Optional[str] = None
    status: Optional[str] = None
    attendance: AttendanceState = AttendanceState.NOT_COUNTING
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = Field(None, max_length=2)
    ag_filiacao: Optional[str] = None


class RollCallEntry(RollCallEntryIn):
    id: str
    last_updated: datetime
    last_updated_by: str

    model_config = {"from_attributes": True}


class RollCallBulkResult(BaseModel):
    inserted: int


class RollCallResetResult(BaseModel):
    affected: int
