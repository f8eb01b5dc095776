# ag_service/api/v1/endpoints/registrations.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.constants import RegistrationStatus
from ag_service.db.session import get_db
from ag_service.schemas.registration import (
    BulkIdsRequest,
    BulkResult,
    BulkReviewRequest,
    ExemptionUpdate,
    ModalityChange,
    ReceiptUpload,
    Registration,
    RegistrationForm,
    RegistrationStats,
    RegistrationStatusLookup,
    ResubmitRequest,
    ReviewRequest,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services import registration_service

router = APIRouter(tags=["Registrations"])


# --- Participant self-service ---


@router.post(
    "/assemblies/{assembly_id}/registrations",
    response_model=Registration,
    status_code=status.HTTP_201_CREATED,
)
def register_for_assembly(
    assembly_id: str,
    form: RegistrationForm,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.register(
        db, assembly_id=assembly_id, user_id=current_user.sub, form=form
    )


@router.get(
    "/assemblies/{assembly_id}/registrations/me", response_model=RegistrationStatusLookup
)
def get_my_registration_status(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.get_user_registration_status(
        db, assembly_id=assembly_id, user_id=current_user.sub
    )


@router.post("/registrations/{registration_id}/receipt", response_model=Registration)
def upload_receipt(
    registration_id: str,
    receipt: ReceiptUpload,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.upload_payment_receipt(
        db, registration_id=registration_id, receipt=receipt, uploaded_by=current_user.sub
    )


@router.put("/registrations/{registration_id}/exemption", response_model=Registration)
def update_exemption(
    registration_id: str,
    exemption: ExemptionUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.update_payment_exemption(
        db,
        registration_id=registration_id,
        is_exempt=exemption.is_exempt,
        reason=exemption.reason,
        updated_by=current_user.sub,
    )


@router.put("/registrations/{registration_id}/modality", response_model=Registration)
def change_modality(
    registration_id: str,
    change: ModalityChange,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.change_modality(
        db,
        registration_id=registration_id,
        modality_id=change.modality_id,
        changed_by=current_user.sub,
    )


@router.post("/registrations/{registration_id}/resubmit", response_model=Registration)
def resubmit_registration(
    registration_id: str,
    resubmit_in: ResubmitRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.resubmit(
        db,
        registration_id=registration_id,
        resubmitted_by=current_user.sub,
        note=resubmit_in.note,
        modality_id=resubmit_in.modality_id,
    )


# --- Admin review ---


@router.get("/assemblies/{assembly_id}/registrations", response_model=List[Registration])
def list_registrations(
    assembly_id: str,
    status: Optional[RegistrationStatus] = None,
    pending_only: bool = False,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    if pending_only:
        return registration_service.get_pending(db, assembly_id=assembly_id)
    return registration_service.get_by_assembly(
        db, assembly_id=assembly_id, status=status.value if status else None
    )


@router.get(
    "/assemblies/{assembly_id}/registrations/stats", response_model=RegistrationStats
)
def get_registration_stats(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.get_stats(db, assembly_id=assembly_id)


@router.get("/registrations/{registration_id}", response_model=Registration)
def get_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.get_registration(db, registration_id=registration_id)


@router.post("/registrations/{registration_id}/approve", response_model=Registration)
def approve_registration(
    registration_id: str,
    review: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.approve(
        db, registration_id=registration_id, reviewed_by=current_user.sub, notes=review.notes
    )


@router.post("/registrations/{registration_id}/reject", response_model=Registration)
def reject_registration(
    registration_id: str,
    review: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.reject(
        db, registration_id=registration_id, reviewed_by=current_user.sub, notes=review.notes
    )


@router.post("/registrations/{registration_id}/review", response_model=Registration)
def send_to_review(
    registration_id: str,
    review: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.mark_pending_review(
        db, registration_id=registration_id, reviewed_by=current_user.sub, notes=review.notes
    )


@router.post("/registrations/{registration_id}/cancel", response_model=Registration)
def cancel_registration(
    registration_id: str,
    review: ReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.cancel(
        db, registration_id=registration_id, cancelled_by=current_user.sub, notes=review.notes
    )


@router.post("/registrations/bulk-approve", response_model=BulkResult)
def bulk_approve(
    bulk_in: BulkReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.bulk_approve(
        db,
        registration_ids=bulk_in.registration_ids,
        reviewed_by=current_user.sub,
        notes=bulk_in.notes,
    )


@router.post("/registrations/bulk-reject", response_model=BulkResult)
def bulk_reject(
    bulk_in: BulkReviewRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return registration_service.bulk_reject(
        db,
        registration_ids=bulk_in.registration_ids,
        reviewed_by=current_user.sub,
        notes=bulk_in.notes,
    )


@router.post("/registrations/bulk-delete")
def bulk_delete(
    bulk_in: BulkIdsRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    deleted = registration_service.bulk_delete(
        db, registration_ids=bulk_in.registration_ids, deleted_by=current_user.sub
    )
    return {"deleted": deleted}


@router.delete("/registrations/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    registration_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    registration_service.delete_registration(
        db, registration_id=registration_id, deleted_by=current_user.sub
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
