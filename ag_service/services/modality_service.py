# ag_service/services/modality_service.py
"""
Registration modalities: pricing tiers of an assembly with optional caps.

Capacity is advisory. ``can_accept_registration`` reads a live count and
reserves nothing, so two concurrent registrations can both pass it.
"""
import logging
from collections import Counter
from typing import List, Optional

from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import ACTIVE_EXCLUDED_STATUSES, AssemblyType
from ag_service.core.config import settings
from ag_service.core.exceptions import ConflictError, NotFoundError
from ag_service.models.registration_modality import RegistrationModality
from ag_service.schemas.modality import (
    ModalityAvailability,
    ModalityCreate,
    ModalityStats,
    ModalityUpdate,
)

logger = logging.getLogger(__name__)

# Fields that cannot be cleared through a partial update
_NON_NULLABLE_FIELDS = {"name", "price", "is_active"}

DEFAULT_MODALITIES = {
    AssemblyType.AGE.value: [
        ModalityCreate(
            name="AGE online",
            price=0,
            description="Participação online na Assembleia Geral Extraordinária",
        ),
    ],
    AssemblyType.AG.value: [
        ModalityCreate(
            name="Participante",
            price=15000,
            max_participants=100,
            description="Participação presencial na Assembleia Geral",
        ),
        ModalityCreate(
            name="Estudante",
            price=10000,
            max_participants=50,
            description="Participação presencial com desconto estudantil",
        ),
        ModalityCreate(
            name="Convidado",
            price=0,
            max_participants=20,
            description="Participação presencial para convidados especiais",
        ),
    ],
}


def get_modality(db: Session, *, modality_id: str) -> RegistrationModality:
    modality = crud.modality.get(db, modality_id)
    if modality is None:
        raise NotFoundError("Modality", modality_id)
    return modality


def list_modalities(
    db: Session, *, assembly_id: str, active_only: bool = False
) -> List[RegistrationModality]:
    return crud.modality.get_by_assembly(db, assembly_id=assembly_id, active_only=active_only)


def create_modality(
    db: Session, *, assembly_id: str, obj_in: ModalityCreate, created_by: str
) -> RegistrationModality:
    assembly = crud.assembly.get(db, assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", assembly_id)

    current_max = crud.modality.get_max_order(db, assembly_id=assembly_id)
    order = crud.assembly.next_modality_order(db, db_obj=assembly, current_max=current_max)
    modality = crud.modality.create_for_assembly(
        db, obj_in=obj_in, assembly_id=assembly_id, order=order, created_by=created_by
    )
    logger.info(f"Created modality {modality.id} ({modality.name}) for assembly {assembly_id}")
    return modality


def update_modality(
    db: Session, *, modality_id: str, obj_in: ModalityUpdate
) -> RegistrationModality:
    modality = get_modality(db, modality_id=modality_id)
    update_data = {
        key: value
        for key, value in obj_in.model_dump(exclude_unset=True).items()
        if not (value is None and key in _NON_NULLABLE_FIELDS)
    }
    if not update_data:
        return modality
    return crud.modality.update(db, db_obj=modality, obj_in=update_data)


def delete_modality(db: Session, *, modality_id: str) -> None:
    modality = get_modality(db, modality_id=modality_id)
    registrations = crud.registration.get_by_modality(db, modality_id=modality_id)
    if registrations:
        raise ConflictError(
            "Cannot delete modality with existing registrations",
            details={"modality_id": modality_id, "registrations": len(registrations)},
        )
    crud.modality.remove(db, id=modality.id)
    logger.info(f"Deleted modality {modality_id}")


def _capacity_flags(active: int, max_participants: Optional[int]) -> tuple[bool, bool, Optional[int]]:
    if not max_participants:
        return False, False, None
    is_full = active >= max_participants
    is_near_full = active >= settings.NEAR_FULL_RATIO * max_participants
    return is_full, is_near_full, max(max_participants - active, 0)


def _build_stats(db: Session, modality: RegistrationModality) -> ModalityStats:
    registrations = crud.registration.get_by_modality(db, modality_id=modality.id)
    by_status = Counter(r.status for r in registrations)
    active = sum(
        count for status, count in by_status.items() if status not in ACTIVE_EXCLUDED_STATUSES
    )
    is_full, is_near_full, available = _capacity_flags(active, modality.max_participants)
    return ModalityStats(
        modality_id=modality.id,
        name=modality.name,
        total=len(registrations),
        active=active,
        max_participants=modality.max_participants,
        is_full=is_full,
        is_near_full=is_near_full,
        available_spots=available,
        by_status=dict(by_status),
    )


def get_modality_stats(db: Session, *, modality_id: str) -> ModalityStats:
    return _build_stats(db, get_modality(db, modality_id=modality_id))


def get_assembly_modality_stats(db: Session, *, assembly_id: str) -> List[ModalityStats]:
    return [_build_stats(db, m) for m in list_modalities(db, assembly_id=assembly_id)]


def can_accept_registration(
    db: Session, *, modality_id: str, exclude_registration_id: Optional[str] = None
) -> ModalityAvailability:
    """
    Whether the modality can take one more registration.

    ``exclude_registration_id`` leaves a registration out of the count, for
    a participant moving into a modality they may already occupy.
    """
    modality = crud.modality.get(db, modality_id)
    if modality is None:
        return ModalityAvailability(can_accept=False, reason="Modality not found")
    if not modality.is_active:
        return ModalityAvailability(can_accept=False, reason="Modality is inactive")
    if not modality.max_participants:
        return ModalityAvailability(can_accept=True, reason="Unlimited capacity")

    active = crud.registration.count_active_by_modality(
        db, modality_id=modality_id, exclude_id=exclude_registration_id
    )
    available = max(modality.max_participants - active, 0)
    if available == 0:
        return ModalityAvailability(can_accept=False, reason="Modality is full", available_spots=0)
    return ModalityAvailability(
        can_accept=True,
        reason=f"{available} spot(s) available",
        available_spots=available,
    )


def initialize_default_modalities(
    db: Session, *, assembly_id: str, created_by: str
) -> List[RegistrationModality]:
    """Create the standard modalities for the assembly type, once."""
    assembly = crud.assembly.get(db, assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", assembly_id)

    existing = list_modalities(db, assembly_id=assembly_id)
    if existing:
        return existing

    created = [
        create_modality(db, assembly_id=assembly_id, obj_in=template, created_by=created_by)
        for template in DEFAULT_MODALITIES.get(assembly.type, [])
    ]
    logger.info(f"Initialized {len(created)} default modalities for assembly {assembly_id}")
    return created
