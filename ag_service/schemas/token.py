# ag_service/schemas/token.py
from pydantic import BaseModel, Field
from typing import Optional


class TokenPayload(BaseModel):
    sub: str  # user id of the caller
    name: Optional[str] = None
    email: Optional[str] = None
    # Admin UIs send the acting member's role, e.g. "eb" or "cr"
    role: Optional[str] = Field(default=None, alias="memberRole")
    exp: int

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }
