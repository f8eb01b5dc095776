# ag_service/api/v1/endpoints/roll_call.py
from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.db.session import get_db
from ag_service.schemas.roll_call import (
    RollCallBulkResult,
    RollCallEntry,
    RollCallEntryIn,
    RollCallResetResult,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services import roll_call_service

router = APIRouter(prefix="/roll-call", tags=["Roll Call"])


@router.get("", response_model=List[RollCallEntry])
def list_entries(
    type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return roll_call_service.list_entries(db, type=type)


@router.post("", response_model=RollCallEntry)
def upsert_entry(
    entry: RollCallEntryIn,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return roll_call_service.upsert_entry(db, entry=entry, updated_by=current_user.sub)


@router.post("/bulk", response_model=RollCallBulkResult, status_code=status.HTTP_201_CREATED)
def bulk_insert(
    entries: List[RollCallEntryIn],
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    inserted = roll_call_service.bulk_insert(db, entries=entries, updated_by=current_user.sub)
    return RollCallBulkResult(inserted=inserted)


@router.post("/reset", response_model=RollCallResetResult)
def reset_attendance(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    affected = roll_call_service.reset_attendance(db, updated_by=current_user.sub)
    return RollCallResetResult(affected=affected)


@router.delete("", response_model=RollCallResetResult)
def clear_roll_call(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    removed = roll_call_service.clear_all(db, cleared_by=current_user.sub)
    return RollCallResetResult(affected=removed)
