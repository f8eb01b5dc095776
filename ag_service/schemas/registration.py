# ag_service/schemas/registration.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from ag_service.constants import RegistrationStatus


class RegistrationPersonalData(BaseModel):
    email: Optional[str] = Field(None, json_schema_extra={"example": "membro@ifmsabrazil.org"})
    phone: Optional[str] = None
    email_solar: Optional[str] = None
    data_nascimento: Optional[str] = None
    cpf: Optional[str] = None
    nome_cracha: Optional[str] = None
    celular: Optional[str] = None
    escola: Optional[str] = None
    regional: Optional[str] = None
    cidade: Optional[str] = None
    uf: Optional[str] = Field(None, max_length=2)
    ag_filiacao: Optional[str] = None
    comite_local: Optional[str] = None
    comite_aspirante: Optional[str] = None
    autorizacao_compartilhamento: Optional[bool] = None


class RegistrationAdditionalInfo(BaseModel):
    experiencia_anterior: Optional[str] = None
    motivacao: Optional[str] = None
    expectativas: Optional[str] = None
    dieta_restricoes: Optional[str] = None
    alergias: Optional[str] = None
    medicamentos: Optional[str] = None
    necessidades_especiais: Optional[str] = None
    restricao_quarto: Optional[str] = None
    pronomes: Optional[str] = None
    contato_emergencia_nome: Optional[str] = None
    contato_emergencia_telefone: Optional[str] = None
    outras_observacoes: Optional[str] = None
    participacao_comites: Optional[list[str]] = None
    interesse_voluntariado: Optional[bool] = None


class RegistrationForm(RegistrationPersonalData, RegistrationAdditionalInfo):
    """What a participant submits to register for an assembly."""
    participant_name: str = Field(..., min_length=1)
    participant_type: str = "individual"
    participant_role: Optional[str] = None
    modality_id: Optional[str] = None
    is_payment_exempt: bool = False
    payment_exempt_reason: Optional[str] = None


class Registration(RegistrationPersonalData, RegistrationAdditionalInfo):
    id: str
    assembly_id: str
    modality_id: Optional[str] = None
    participant_type: str
    participant_id: str
    participant_name: str
    participant_role: Optional[str] = None
    participant_status: Optional[str] = None
    status: RegistrationStatus
    registered_at: datetime
    registered_by: str

    is_payment_exempt: bool
    payment_exempt_reason: Optional[str] = None
    receipt_file_name: Optional[str] = None
    receipt_file_type: Optional[str] = None
    receipt_file_size: Optional[int] = None
    receipt_storage_id: Optional[str] = None
    receipt_uploaded_at: Optional[datetime] = None

    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    review_notes: Optional[str] = None
    resubmitted_at: Optional[datetime] = None
    resubmission_note: Optional[str] = None

    model_config = {"from_attributes": True}


class ReviewRequest(BaseModel):
    notes: Optional[str] = None


class BulkReviewRequest(BaseModel):
    registration_ids: list[str] = Field(..., min_length=1)
    notes: Optional[str] = None


class BulkIdsRequest(BaseModel):
    registration_ids: list[str] = Field(..., min_length=1)


class BulkResult(BaseModel):
    updated: list[str]
    skipped: list[str]


class ReceiptUpload(BaseModel):
    """Metadata of a receipt already stored by the file service."""
    file_name: str
    file_type: str
    file_size: int = Field(..., ge=0)
    storage_id: str


class ExemptionUpdate(BaseModel):
    is_exempt: bool
    reason: Optional[str] = None


class ModalityChange(BaseModel):
    modality_id: str


class ResubmitRequest(BaseModel):
    note: Optional[str] = None
    modality_id: Optional[str] = None


class RegistrationStatusLookup(BaseModel):
    is_registered: bool
    registration_id: Optional[str] = None
    status: Optional[RegistrationStatus] = None
    modality_id: Optional[str] = None
    review_notes: Optional[str] = None


class RegistrationStats(BaseModel):
    total: int
    by_status: dict[str, int]
    by_type: dict[str, int]
