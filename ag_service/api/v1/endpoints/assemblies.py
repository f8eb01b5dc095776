# ag_service/api/v1/endpoints/assemblies.py
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.constants import AssemblyStatus
from ag_service.db.session import get_db
from ag_service.schemas.assembly import (
    Assembly,
    AssemblyCreate,
    AssemblyDeleteRequest,
    AssemblyDeletionSummary,
    AssemblyRegistrationStats,
    AssemblyUpdate,
    BulkParticipantsResult,
    Participant,
    ParticipantIn,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services import assembly_service

router = APIRouter(tags=["Assemblies"])


@router.post("/assemblies", response_model=Assembly, status_code=status.HTTP_201_CREATED)
def create_assembly(
    assembly_in: AssemblyCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.create_assembly(db, obj_in=assembly_in, created_by=current_user.sub)


@router.get("/assemblies", response_model=List[Assembly])
def list_assemblies(
    status: Optional[AssemblyStatus] = None,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.list_assemblies(db, status=status.value if status else None)


@router.get("/assemblies/{assembly_id}", response_model=Assembly)
def get_assembly(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.get_assembly(db, assembly_id=assembly_id)


@router.patch("/assemblies/{assembly_id}", response_model=Assembly)
def update_assembly(
    assembly_id: str,
    assembly_in: AssemblyUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.update_assembly(
        db, assembly_id=assembly_id, obj_in=assembly_in, updated_by=current_user.sub
    )


@router.post("/assemblies/{assembly_id}/archive", response_model=Assembly)
def archive_assembly(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.archive_assembly(
        db, assembly_id=assembly_id, archived_by=current_user.sub
    )


@router.delete("/assemblies/{assembly_id}", response_model=AssemblyDeletionSummary)
def delete_assembly(
    assembly_id: str,
    delete_in: AssemblyDeleteRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Permanently delete an archived assembly with its registrations, roster,
    modalities, sessions and attendance. The body must repeat the assembly
    name.
    """
    return assembly_service.delete_assembly(
        db,
        assembly_id=assembly_id,
        confirmation_text=delete_in.confirmation_text,
        deleted_by=current_user.sub,
    )


@router.get("/assemblies/{assembly_id}/participants", response_model=List[Participant])
def list_participants(
    assembly_id: str,
    type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.get_participants(db, assembly_id=assembly_id, type=type)


@router.post(
    "/assemblies/{assembly_id}/participants",
    response_model=BulkParticipantsResult,
    status_code=status.HTTP_201_CREATED,
)
def import_participants(
    assembly_id: str,
    participants: List[ParticipantIn],
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    inserted = assembly_service.bulk_insert_participants(
        db, assembly_id=assembly_id, participants=participants
    )
    return BulkParticipantsResult(inserted=inserted)


@router.get("/assemblies/{assembly_id}/stats", response_model=AssemblyRegistrationStats)
def get_assembly_stats(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return assembly_service.get_registration_stats(db, assembly_id=assembly_id)
