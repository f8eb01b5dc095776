# ag_service/api/v1/endpoints/modalities.py
from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.db.session import get_db
from ag_service.schemas.modality import (
    Modality,
    ModalityAvailability,
    ModalityCreate,
    ModalityStats,
    ModalityUpdate,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services import modality_service

router = APIRouter(tags=["Modalities"])


@router.get("/assemblies/{assembly_id}/modalities", response_model=List[Modality])
def list_modalities(
    assembly_id: str,
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.list_modalities(db, assembly_id=assembly_id, active_only=active_only)


@router.post(
    "/assemblies/{assembly_id}/modalities",
    response_model=Modality,
    status_code=status.HTTP_201_CREATED,
)
def create_modality(
    assembly_id: str,
    modality_in: ModalityCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.create_modality(
        db, assembly_id=assembly_id, obj_in=modality_in, created_by=current_user.sub
    )


@router.post("/assemblies/{assembly_id}/modalities/defaults", response_model=List[Modality])
def initialize_default_modalities(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.initialize_default_modalities(
        db, assembly_id=assembly_id, created_by=current_user.sub
    )


@router.get("/modalities/{modality_id}", response_model=Modality)
def get_modality(
    modality_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.get_modality(db, modality_id=modality_id)


@router.patch("/modalities/{modality_id}", response_model=Modality)
def update_modality(
    modality_id: str,
    modality_in: ModalityUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.update_modality(db, modality_id=modality_id, obj_in=modality_in)


@router.delete("/modalities/{modality_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_modality(
    modality_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    modality_service.delete_modality(db, modality_id=modality_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/modalities/{modality_id}/stats", response_model=ModalityStats)
def get_modality_stats(
    modality_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.get_modality_stats(db, modality_id=modality_id)


@router.get("/modalities/{modality_id}/availability", response_model=ModalityAvailability)
def get_modality_availability(
    modality_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return modality_service.can_accept_registration(db, modality_id=modality_id)
