# ag_service/schemas/modality.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class ModalityCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Participante"})
    price: int = Field(..., ge=0, description="Price in centavos")
    max_participants: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None


class ModalityUpdate(BaseModel):
    """Only fields present in the request body are applied."""
    name: Optional[str] = Field(None, min_length=1)
    price: Optional[int] = Field(None, ge=0)
    max_participants: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class Modality(BaseModel):
    id: str
    assembly_id: str
    name: str
    description: Optional[str] = None
    price: int
    max_participants: Optional[int] = None
    is_active: bool
    order: int
    created_at: datetime
    created_by: str

    model_config = {"from_attributes": True}


class ModalityStats(BaseModel):
    modality_id: str
    name: str
    total: int
    active: int
    max_participants: Optional[int] = None
    is_full: bool
    is_near_full: bool
    available_spots: Optional[int] = None
    by_status: dict[str, int] = {}


class ModalityAvailability(BaseModel):
    can_accept: bool
    # Display text only, not an error code
    reason: str
    available_spots: Optional[int] = None
