# ag_service/services/assembly_service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import ACTIVE_EXCLUDED_STATUSES, AssemblyStatus
from ag_service.core.config import settings
from ag_service.core.exceptions import ConflictError, NotFoundError, ValidationError
from ag_service.models.assembly import Assembly
from ag_service.models.assembly_participant import AssemblyParticipant
from ag_service.schemas.assembly import (
    AssemblyCreate,
    AssemblyDeletionSummary,
    AssemblyRegistrationStats,
    AssemblyUpdate,
    CapacitySummary,
    ParticipantIn,
)
from ag_service.services import modality_service
from ag_service.utils.time import utcnow

logger = logging.getLogger(__name__)


def get_assembly(db: Session, *, assembly_id: str) -> Assembly:
    assembly = crud.assembly.get(db, assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", assembly_id)
    return assembly


def list_assemblies(db: Session, *, status: Optional[str] = None) -> List[Assembly]:
    return crud.assembly.get_multi_by_status(db, status=status)


def create_assembly(db: Session, *, obj_in: AssemblyCreate, created_by: str) -> Assembly:
    assembly = crud.assembly.create_with_owner(db, obj_in=obj_in, created_by=created_by)
    logger.info(f"Created assembly {assembly.id} ({assembly.type} {assembly.name})")
    return assembly


def update_assembly(
    db: Session, *, assembly_id: str, obj_in: AssemblyUpdate, updated_by: str
) -> Assembly:
    assembly = get_assembly(db, assembly_id=assembly_id)
    update_data = obj_in.model_dump(exclude_unset=True)
    if "type" in update_data and update_data["type"] is not None:
        update_data["type"] = update_data["type"].value
    update_data["last_updated"] = utcnow()
    update_data["last_updated_by"] = updated_by
    return crud.assembly.update(db, db_obj=assembly, obj_in=update_data)


def archive_assembly(db: Session, *, assembly_id: str, archived_by: str) -> Assembly:
    assembly = get_assembly(db, assembly_id=assembly_id)
    if assembly.status != AssemblyStatus.ACTIVE.value:
        raise ConflictError("Only active assemblies can be archived")
    archived = crud.assembly.update(
        db,
        db_obj=assembly,
        obj_in={
            "status": AssemblyStatus.ARCHIVED.value,
            "registration_open": False,
            "last_updated": utcnow(),
            "last_updated_by": archived_by,
        },
    )
    logger.info(f"Archived assembly {assembly_id} by {archived_by}")
    return archived


def delete_assembly(
    db: Session, *, assembly_id: str, confirmation_text: str, deleted_by: str
) -> AssemblyDeletionSummary:
    """
    Permanently delete an archived assembly and everything hanging off it.

    The caller must type the assembly name as confirmation.
    """
    assembly = get_assembly(db, assembly_id=assembly_id)
    if assembly.status != AssemblyStatus.ARCHIVED.value:
        raise ConflictError("Only archived assemblies can be deleted")
    if confirmation_text != assembly.name:
        raise ValidationError(
            "Confirmation text does not match assembly name", field="confirmation_text"
        )

    sessions = crud.ag_session.get_by_assembly(db, assembly_id=assembly_id)
    attendance_deleted = crud.attendance.remove_by_sessions(
        db, session_ids=[s.id for s in sessions]
    )
    sessions_deleted = crud.ag_session.remove_by_assembly(db, assembly_id=assembly_id)
    # Registrations reference modalities, so they go first
    registrations_deleted = crud.registration.remove_by_assembly(db, assembly_id=assembly_id)
    participants_deleted = crud.participant.remove_by_assembly(db, assembly_id=assembly_id)
    modalities_deleted = crud.modality.remove_by_assembly(db, assembly_id=assembly_id)
    name = assembly.name
    crud.assembly.remove(db, id=assembly_id)

    logger.info(
        f"Assembly {assembly_id} permanently deleted by {deleted_by}: "
        f"{registrations_deleted} registrations, {participants_deleted} participants, "
        f"{modalities_deleted} modalities, {sessions_deleted} sessions"
    )
    return AssemblyDeletionSummary(
        assembly_id=assembly_id,
        assembly_name=name,
        registrations=registrations_deleted,
        participants=participants_deleted,
        modalities=modalities_deleted,
        sessions=sessions_deleted,
        attendance_records=attendance_deleted,
    )


def bulk_insert_participants(
    db: Session, *, assembly_id: str, participants: List[ParticipantIn]
) -> int:
    get_assembly(db, assembly_id=assembly_id)
    inserted = crud.participant.bulk_create(
        db, assembly_id=assembly_id, participants=participants
    )
    logger.info(f"Imported {inserted} roster participants into assembly {assembly_id}")
    return inserted


def get_participants(
    db: Session, *, assembly_id: str, type: Optional[str] = None
) -> List[AssemblyParticipant]:
    return crud.participant.get_by_assembly(
        db, assembly_id=assembly_id, types=[type] if type else None
    )


def get_registration_stats(db: Session, *, assembly_id: str) -> AssemblyRegistrationStats:
    assembly = get_assembly(db, assembly_id=assembly_id)
    by_status = crud.registration.count_by_status(db, assembly_id=assembly_id)
    active = sum(
        count for status, count in by_status.items() if status not in ACTIVE_EXCLUDED_STATUSES
    )

    capacity = None
    if assembly.max_participants:
        capacity = CapacitySummary(
            max_participants=assembly.max_participants,
            active=active,
            is_full=active >= assembly.max_participants,
            is_near_full=active >= settings.NEAR_FULL_RATIO * assembly.max_participants,
            available_spots=max(assembly.max_participants - active, 0),
        )

    return AssemblyRegistrationStats(
        total_registrations=sum(by_status.values()),
        active_registrations=active,
        by_type=crud.registration.count_by_type(db, assembly_id=assembly_id),
        by_status=by_status,
        participants_by_type=crud.participant.count_by_type(db, assembly_id=assembly_id),
        modalities=modality_service.get_assembly_modality_stats(db, assembly_id=assembly_id),
        assembly_capacity=capacity,
    )
