# ag_service/schemas/report.py
"""
Inputs and outputs of the attendance report generator.

The generator takes one explicit variant: either a session snapshot (a
flat list of attendance rows) or pre-bucketed standalone roll call data.
"""
from dataclasses import dataclass, field
from io import BytesIO
from typing import Annotated, Literal, Optional, Union
from datetime import datetime

from pydantic import BaseModel, Field


class ReportRow(BaseModel):
    participant_id: Optional[str] = None
    participant_type: str
    participant_name: Optional[str] = None
    participant_role: Optional[str] = None
    participant_status: Optional[str] = None
    comite_local: Optional[str] = None
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = None
    attendance: str
    marked_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RosterStatus(BaseModel):
    """Authoritative committee standing taken from the assembly roster."""
    participant_id: str
    status: Optional[str] = None

    model_config = {"from_attributes": True}


class SessionReportInput(BaseModel):
    mode: Literal["session"] = "session"
    session_name: str
    session_type: Literal["plenaria", "sessao"]
    records: list[ReportRow] = []
    # Committee roster; when given it decides Pleno vs Não-pleno
    committee_roster: Optional[list[RosterStatus]] = None


class AvulsaReportInput(BaseModel):
    mode: Literal["avulsa"] = "avulsa"
    name: Optional[str] = None
    ebs: list[ReportRow] = []
    crs: list[ReportRow] = []
    comites_plenos: list[ReportRow] = []
    comites_nao_plenos: list[ReportRow] = []
    # Rows that are not eb, cr or comite (walk-ins of an ad hoc session)
    participantes: list[ReportRow] = []


ReportInput = Annotated[
    Union[SessionReportInput, AvulsaReportInput], Field(discriminator="mode")
]


@dataclass
class AGReportResult:
    buffer: BytesIO
    filename: str
    stats: dict = field(default_factory=dict)
