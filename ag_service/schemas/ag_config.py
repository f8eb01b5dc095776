# ag_service/schemas/ag_config.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AGConfigUpdate(BaseModel):
    registration_enabled: Optional[bool] = None
    auto_approval: Optional[bool] = None
    code_of_conduct_url: Optional[str] = None
    payment_info: Optional[str] = None
    payment_instructions: Optional[str] = None
    bank_details: Optional[str] = None
    pix_key: Optional[str] = None


class AGConfig(BaseModel):
    id: str
    registration_enabled: bool
    auto_approval: bool
    code_of_conduct_url: Optional[str] = None
    payment_info: Optional[str] = None
    payment_instructions: Optional[str] = None
    bank_details: Optional[str] = None
    pix_key: Optional[str] = None
    updated_at: datetime
    updated_by: str

    model_config = {"from_attributes": True}


class ToggleRequest(BaseModel):
    enabled: bool
