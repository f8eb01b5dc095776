# ag_service/schemas/assembly.py
from pydantic import BaseModel, Field, model_validator
from typing import Literal, Optional
from datetime import datetime

from ag_service.constants import AssemblyStatus, AssemblyType
from ag_service.schemas.modality import ModalityStats


class AssemblyBase(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "AG Brasília 2026"})
    type: AssemblyType
    location: str
    start_date: datetime
    end_date: datetime
    registration_deadline: Optional[datetime] = None
    max_participants: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None


class AssemblyCreate(AssemblyBase):
    registration_open: bool = True
    # Defaults to True for in-person AGs when omitted
    payment_required: Optional[bool] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AssemblyUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[AssemblyType] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    registration_open: Optional[bool] = None
    registration_deadline: Optional[datetime] = None
    max_participants: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    payment_required: Optional[bool] = None


class Assembly(AssemblyBase):
    id: str
    status: AssemblyStatus
    registration_open: bool
    payment_required: bool
    created_at: datetime
    created_by: str
    last_updated: datetime
    last_updated_by: str

    model_config = {"from_attributes": True}


class AssemblyDeleteRequest(BaseModel):
    confirmation_text: str


class AssemblyDeletionSummary(BaseModel):
    assembly_id: str
    assembly_name: str
    registrations: int
    participants: int
    modalities: int
    sessions: int
    attendance_records: int


class ParticipantIn(BaseModel):
    type: Literal["eb", "cr", "comite"]
    participant_id: str
    name: str
    role: Optional[str] = None
    status: Optional[str] = None
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = Field(None, max_length=2)
    ag_filiacao: Optional[str] = None


class Participant(ParticipantIn):
    id: str
    assembly_id: str
    created_at: datetime

    model_config = {"from_attributes": True}


class BulkParticipantsResult(BaseModel):
    inserted: int


class CapacitySummary(BaseModel):
    max_participants: int
    active: int
    is_full: bool
    is_near_full: bool
    available_spots: int


class AssemblyRegistrationStats(BaseModel):
    total_registrations: int
    active_registrations: int
    by_type: dict[str, int]
    by_status: dict[str, int]
    participants_by_type: dict[str, int]
    modalities: list[ModalityStats]
    assembly_capacity: Optional[CapacitySummary] = None
