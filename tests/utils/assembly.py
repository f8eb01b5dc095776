from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.models.assembly import Assembly
from ag_service.schemas.assembly import AssemblyCreate, ParticipantIn
from ag_service.schemas.modality import ModalityCreate
from ag_service.services import modality_service


def create_random_assembly(
    db: Session,
    *,
    name: str = "AG Teste 2026",
    type: str = "AG",
    max_participants: Optional[int] = None,
    registration_deadline: Optional[datetime] = None,
) -> Assembly:
    """
    Creates an open assembly starting next month.
    """
    start = datetime.now(timezone.utc) + timedelta(days=30)
    assembly_in = AssemblyCreate(
        name=name,
        type=type,
        location="Brasília, DF",
        start_date=start,
        end_date=start + timedelta(days=3),
        max_participants=max_participants,
        registration_deadline=registration_deadline,
    )
    return crud.assembly.create_with_owner(db, obj_in=assembly_in, created_by="admin_1")


def add_roster(db: Session, assembly_id: str) -> int:
    """
    Imports a small roster: one EB, one CR, a full and a non-full committee.
    """
    participants = [
        ParticipantIn(type="eb", participant_id="eb_1", name="Beatriz Lima", role="Presidente"),
        ParticipantIn(type="cr", participant_id="cr_1", name="Carlos Dias", role="CR Sul"),
        ParticipantIn(
            type="comite",
            participant_id="cl_ufmg",
            name="IFMSA UFMG",
            status="Pleno",
            escola="UFMG",
            regional="Sudeste",
            cidade="Belo Horizonte",
            uf="MG",
        ),
        ParticipantIn(
            type="comite",
            participant_id="cl_ufba",
            name="IFMSA UFBA",
            status="Não-pleno",
            escola="UFBA",
            regional="Nordeste",
            cidade="Salvador",
            uf="BA",
        ),
    ]
    return crud.participant.bulk_create(db, assembly_id=assembly_id, participants=participants)


def create_modality(
    db: Session, assembly_id: str, *, name: str = "Participante", max_participants: Optional[int] = None
):
    return modality_service.create_modality(
        db,
        assembly_id=assembly_id,
        obj_in=ModalityCreate(name=name, price=15000, max_participants=max_participants),
        created_by="admin_1",
    )
