from typing import Optional
from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.models.registration import Registration
from ag_service.schemas.ag_config import AGConfigUpdate
from ag_service.schemas.registration import RegistrationForm


def create_registration(
    db: Session,
    assembly_id: str,
    *,
    participant_id: str = "user_1",
    name: str = "Joana Prado",
    status: str = "pending",
    modality_id: Optional[str] = None,
) -> Registration:
    """
    Inserts a registration directly, bypassing the open/capacity checks.
    """
    form = RegistrationForm(
        participant_name=name,
        modality_id=modality_id,
        email=f"{participant_id}@ifmsabrazil.org",
        celular="+55 61 99999-0000",
        escola="UnB",
        regional="Centro-Oeste",
        cidade="Brasília",
        uf="DF",
        comite_local="IFMSA UnB",
    )
    return crud.registration.create_from_form(
        db, form=form, assembly_id=assembly_id, participant_id=participant_id, status=status
    )


def set_config(db: Session, **fields):
    return crud.ag_config.upsert(db, obj_in=AGConfigUpdate(**fields), updated_by="admin_1")
