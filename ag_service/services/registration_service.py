# ag_service/services/registration_service.py
"""
Registration lifecycle: participant self-service and admin review.

Statuses move along ``ALLOWED_TRANSITIONS``; a cancelled registration is
final. Modality and assembly capacity are checked before writes but not
reserved.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import (
    REVIEW_QUEUE_STATUSES,
    AssemblyStatus,
    RegistrationStatus,
    can_transition,
)
from ag_service.core.exceptions import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    RegistrationClosedError,
    ValidationError,
)
from ag_service.models.assembly import Assembly
from ag_service.models.registration import Registration
from ag_service.schemas.registration import (
    BulkResult,
    ReceiptUpload,
    RegistrationForm,
    RegistrationStats,
    RegistrationStatusLookup,
)
from ag_service.services import modality_service
from ag_service.utils.time import as_utc, utcnow

logger = logging.getLogger(__name__)

SYSTEM_REVIEWER = "system"
AUTO_APPROVAL_NOTE = "Auto-approved by system"

_ACTION_VERBS = {
    RegistrationStatus.APPROVED.value: "approve",
    RegistrationStatus.REJECTED.value: "reject",
    RegistrationStatus.PENDING_REVIEW.value: "send to review",
    RegistrationStatus.PENDING.value: "reopen",
    RegistrationStatus.CANCELLED.value: "cancel",
}


def get_registration(db: Session, *, registration_id: str) -> Registration:
    registration = crud.registration.get(db, registration_id)
    if registration is None:
        raise NotFoundError("Registration", registration_id)
    return registration


def _auto_approval_enabled(db: Session) -> bool:
    config = crud.ag_config.get_current(db)
    return bool(config and config.auto_approval)


def _ensure_registration_open(db: Session, assembly: Assembly) -> None:
    config = crud.ag_config.get_current(db)
    if config is not None and not config.registration_enabled:
        raise RegistrationClosedError("Registrations are currently disabled globally")
    if assembly.status != AssemblyStatus.ACTIVE.value or not assembly.registration_open:
        raise RegistrationClosedError("Registration is closed for this assembly")
    deadline = as_utc(assembly.registration_deadline)
    if deadline is not None and utcnow() > deadline:
        raise RegistrationClosedError("Registration deadline has passed")


def _ensure_modality_available(
    db: Session,
    *,
    assembly_id: str,
    modality_id: str,
    exclude_registration_id: Optional[str] = None,
) -> None:
    modality = crud.modality.get(db, modality_id)
    if modality is None or not modality.is_active:
        raise ValidationError(
            "Selected registration modality is not available", field="modality_id"
        )
    if modality.assembly_id != assembly_id:
        raise ValidationError("Modality does not belong to this assembly", field="modality_id")

    availability = modality_service.can_accept_registration(
        db, modality_id=modality_id, exclude_registration_id=exclude_registration_id
    )
    if not availability.can_accept:
        raise ConflictError(
            "This registration modality is full",
            details={"modality_id": modality_id, "reason": availability.reason},
        )


def _initial_status(auto_approve: bool) -> tuple[str, dict]:
    if auto_approve:
        return RegistrationStatus.APPROVED.value, {
            "reviewed_at": utcnow(),
            "reviewed_by": SYSTEM_REVIEWER,
            "review_notes": AUTO_APPROVAL_NOTE,
        }
    return RegistrationStatus.PENDING.value, {}


def register(
    db: Session, *, assembly_id: str, user_id: str, form: RegistrationForm
) -> Registration:
    assembly = crud.assembly.get(db, assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", assembly_id)
    _ensure_registration_open(db, assembly)

    if form.modality_id:
        _ensure_modality_available(db, assembly_id=assembly_id, modality_id=form.modality_id)

    existing = crud.registration.get_by_assembly_and_participant(
        db, assembly_id=assembly_id, participant_id=user_id
    )
    if any(r.status != RegistrationStatus.CANCELLED.value for r in existing):
        raise ConflictError("User is already registered for this assembly")

    if assembly.max_participants:
        active = crud.registration.count_active_by_assembly(db, assembly_id=assembly_id)
        if active >= assembly.max_participants:
            raise ConflictError("Assembly has reached maximum number of participants")

    status, review_fields = _initial_status(_auto_approval_enabled(db))
    registration = crud.registration.create_from_form(
        db,
        form=form,
        assembly_id=assembly_id,
        participant_id=user_id,
        status=status,
        review_fields=review_fields,
    )
    logger.info(
        f"Registration {registration.id} created for user {user_id} in assembly "
        f"{assembly_id} with status {status}"
    )
    return registration


def _transition(
    db: Session,
    registration: Registration,
    target: str,
    *,
    reviewed_by: str,
    notes: Optional[str] = None,
) -> Registration:
    if not can_transition(registration.status, target):
        verb = _ACTION_VERBS.get(target, "update")
        raise InvalidTransitionError(
            registration.status,
            target,
            message=f"Cannot {verb} a {registration.status} registration",
        )
    previous = registration.status
    updated = crud.registration.update(
        db,
        db_obj=registration,
        obj_in={
            "status": target,
            "reviewed_at": utcnow(),
            "reviewed_by": reviewed_by,
            "review_notes": notes,
        },
    )
    logger.info(f"Registration {registration.id}: {previous} -> {target} by {reviewed_by}")
    return updated


def approve(
    db: Session, *, registration_id: str, reviewed_by: str, notes: Optional[str] = None
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    return _transition(
        db, registration, RegistrationStatus.APPROVED.value, reviewed_by=reviewed_by, notes=notes
    )


def reject(
    db: Session, *, registration_id: str, reviewed_by: str, notes: Optional[str] = None
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    return _transition(
        db, registration, RegistrationStatus.REJECTED.value, reviewed_by=reviewed_by, notes=notes
    )


def mark_pending_review(
    db: Session, *, registration_id: str, reviewed_by: str, notes: Optional[str] = None
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    return _transition(
        db,
        registration,
        RegistrationStatus.PENDING_REVIEW.value,
        reviewed_by=reviewed_by,
        notes=notes,
    )


def cancel(
    db: Session, *, registration_id: str, cancelled_by: str, notes: Optional[str] = None
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    if registration.status == RegistrationStatus.CANCELLED.value:
        raise InvalidTransitionError(
            registration.status,
            RegistrationStatus.CANCELLED.value,
            message="Registration is already cancelled",
        )
    return _transition(
        db,
        registration,
        RegistrationStatus.CANCELLED.value,
        reviewed_by=cancelled_by,
        notes=notes,
    )


def _bulk_transition(
    db: Session, *, ids: List[str], target: str, reviewed_by: str, notes: Optional[str]
) -> BulkResult:
    registrations = {r.id: r for r in crud.registration.get_by_ids(db, ids=ids)}
    updated, skipped = [], []
    for registration_id in ids:
        registration = registrations.get(registration_id)
        if registration is None or not can_transition(registration.status, target):
            skipped.append(registration_id)
            continue
        _transition(db, registration, target, reviewed_by=reviewed_by, notes=notes)
        updated.append(registration_id)
    return BulkResult(updated=updated, skipped=skipped)


def bulk_approve(
    db: Session, *, registration_ids: List[str], reviewed_by: str, notes: Optional[str] = None
) -> BulkResult:
    return _bulk_transition(
        db,
        ids=registration_ids,
        target=RegistrationStatus.APPROVED.value,
        reviewed_by=reviewed_by,
        notes=notes,
    )


def bulk_reject(
    db: Session, *, registration_ids: List[str], reviewed_by: str, notes: Optional[str] = None
) -> BulkResult:
    return _bulk_transition(
        db,
        ids=registration_ids,
        target=RegistrationStatus.REJECTED.value,
        reviewed_by=reviewed_by,
        notes=notes,
    )


def upload_payment_receipt(
    db: Session, *, registration_id: str, receipt: ReceiptUpload, uploaded_by: str
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    if registration.status == RegistrationStatus.CANCELLED.value:
        raise InvalidTransitionError(
            registration.status,
            RegistrationStatus.PENDING_REVIEW.value,
            message="Cannot upload a receipt for a cancelled registration",
        )
    return crud.registration.update(
        db,
        db_obj=registration,
        obj_in={
            "receipt_file_name": receipt.file_name,
            "receipt_file_type": receipt.file_type,
            "receipt_file_size": receipt.file_size,
            "receipt_storage_id": receipt.storage_id,
            "receipt_uploaded_at": utcnow(),
            "receipt_uploaded_by": uploaded_by,
            "status": RegistrationStatus.PENDING_REVIEW.value,
        },
    )


def update_payment_exemption(
    db: Session,
    *,
    registration_id: str,
    is_exempt: bool,
    reason: Optional[str],
    updated_by: str,
) -> Registration:
    """
    Exempt registrations skip the receipt and go straight to review.
    Removing an exemption sends a receipt-less registration back to pending.
    """
    registration = get_registration(db, registration_id=registration_id)
    if registration.status == RegistrationStatus.CANCELLED.value:
        raise InvalidTransitionError(
            registration.status,
            registration.status,
            message="Cannot change payment exemption of a cancelled registration",
        )
    update_data = {
        "is_payment_exempt": is_exempt,
        "payment_exempt_reason": reason if is_exempt else None,
    }
    if is_exempt:
        update_data["status"] = RegistrationStatus.PENDING_REVIEW.value
    elif (
        registration.status == RegistrationStatus.PENDING_REVIEW.value
        and not registration.receipt_storage_id
    ):
        update_data["status"] = RegistrationStatus.PENDING.value
    logger.info(
        f"Payment exemption for registration {registration_id} set to {is_exempt} by {updated_by}"
    )
    return crud.registration.update(db, db_obj=registration, obj_in=update_data)


def change_modality(
    db: Session, *, registration_id: str, modality_id: str, changed_by: str
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    if registration.status == RegistrationStatus.CANCELLED.value:
        raise InvalidTransitionError(
            registration.status,
            registration.status,
            message="Cannot change the modality of a cancelled registration",
        )
    if registration.modality_id == modality_id:
        return registration
    _ensure_modality_available(
        db,
        assembly_id=registration.assembly_id,
        modality_id=modality_id,
        exclude_registration_id=registration.id,
    )
    logger.info(
        f"Registration {registration_id} moved from modality {registration.modality_id} "
        f"to {modality_id} by {changed_by}"
    )
    return crud.registration.update(db, db_obj=registration, obj_in={"modality_id": modality_id})


def resubmit(
    db: Session,
    *,
    registration_id: str,
    resubmitted_by: str,
    note: Optional[str] = None,
    modality_id: Optional[str] = None,
) -> Registration:
    registration = get_registration(db, registration_id=registration_id)
    if registration.status != RegistrationStatus.REJECTED.value:
        raise InvalidTransitionError(
            registration.status,
            RegistrationStatus.PENDING.value,
            message="Only rejected registrations can be resubmitted",
        )
    assembly = crud.assembly.get(db, registration.assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", registration.assembly_id)
    _ensure_registration_open(db, assembly)
    if modality_id and modality_id != registration.modality_id:
        _ensure_modality_available(
            db,
            assembly_id=registration.assembly_id,
            modality_id=modality_id,
            exclude_registration_id=registration.id,
        )

    status, review_fields = _initial_status(_auto_approval_enabled(db))
    update_data = {
        "status": status,
        "resubmitted_at": utcnow(),
        "resubmission_note": note,
        "reviewed_at": None,
        "reviewed_by": None,
        "review_notes": None,
        **review_fields,
    }
    if modality_id:
        update_data["modality_id"] = modality_id
    logger.info(f"Registration {registration_id} resubmitted by {resubmitted_by} as {status}")
    return crud.registration.update(db, db_obj=registration, obj_in=update_data)


def get_by_assembly(
    db: Session, *, assembly_id: str, status: Optional[str] = None
) -> List[Registration]:
    return crud.registration.get_by_assembly(db, assembly_id=assembly_id, status=status)


def get_pending(db: Session, *, assembly_id: str) -> List[Registration]:
    return crud.registration.get_by_assembly_and_statuses(
        db, assembly_id=assembly_id, statuses=sorted(REVIEW_QUEUE_STATUSES)
    )


def get_user_registration_status(
    db: Session, *, assembly_id: str, user_id: str
) -> RegistrationStatusLookup:
    registrations = crud.registration.get_by_assembly_and_participant(
        db, assembly_id=assembly_id, participant_id=user_id
    )
    if not registrations:
        return RegistrationStatusLookup(is_registered=False)
    latest = registrations[0]
    return RegistrationStatusLookup(
        is_registered=True,
        registration_id=latest.id,
        status=latest.status,
        modality_id=latest.modality_id,
        review_notes=latest.review_notes,
    )


def get_stats(db: Session, *, assembly_id: str) -> RegistrationStats:
    by_status = crud.registration.count_by_status(db, assembly_id=assembly_id)
    return RegistrationStats(
        total=sum(by_status.values()),
        by_status=by_status,
        by_type=crud.registration.count_by_type(db, assembly_id=assembly_id),
    )


def delete_registration(db: Session, *, registration_id: str, deleted_by: str) -> None:
    get_registration(db, registration_id=registration_id)
    crud.registration.remove(db, id=registration_id)
    logger.info(f"Registration {registration_id} deleted by {deleted_by}")


def bulk_delete(db: Session, *, registration_ids: List[str], deleted_by: str) -> int:
    deleted = crud.registration.remove_many(db, ids=registration_ids)
    logger.info(f"{deleted} registrations deleted by {deleted_by}")
    return deleted
