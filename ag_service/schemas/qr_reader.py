# ag_service/schemas/qr_reader.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ag_service.constants import ParticipantType


class QRReaderCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Entrada principal"})
    # Bind the reader to a session; unbound readers feed the roll call
    session_id: Optional[str] = None


class QRReaderCreated(BaseModel):
    id: str
    token: str


class QRReader(BaseModel):
    id: str
    name: str
    token: str
    session_id: Optional[str] = None
    assembly_id: Optional[str] = None
    is_active: bool
    created_at: datetime
    created_by: str

    model_config = {"from_attributes": True}


class QRScan(BaseModel):
    """Payload decoded from a participant's badge QR code."""
    participant_id: str
    participant_type: ParticipantType
    participant_name: str
    participant_role: Optional[str] = None


class QRScanResult(BaseModel):
    reader_id: str
    session_id: Optional[str] = None
    record_id: str


class QRReaderClearResult(BaseModel):
    removed: int
