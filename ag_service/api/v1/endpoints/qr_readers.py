# ag_service/api/v1/endpoints/qr_readers.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.db.session import get_db
from ag_service.schemas.qr_reader import (
    QRReader,
    QRReaderClearResult,
    QRReaderCreate,
    QRReaderCreated,
    QRScan,
    QRScanResult,
)
from ag_service.schemas.token import TokenPayload
from ag_service.services import qr_reader_service

router = APIRouter(prefix="/qr-readers", tags=["QR Readers"])


@router.post("", response_model=QRReaderCreated, status_code=status.HTTP_201_CREATED)
def create_reader(
    reader_in: QRReaderCreate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    reader = qr_reader_service.create_reader(
        db,
        name=reader_in.name,
        session_id=reader_in.session_id,
        created_by=current_user.sub,
    )
    return QRReaderCreated(id=reader.id, token=reader.token)


@router.get("", response_model=List[QRReader])
def list_readers(
    session_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return qr_reader_service.list_active(db, session_id=session_id)


@router.delete("", response_model=QRReaderClearResult)
def clear_readers(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    removed = qr_reader_service.clear_all(db, cleared_by=current_user.sub)
    return QRReaderClearResult(removed=removed)


@router.delete("/{reader_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_reader(
    reader_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    qr_reader_service.remove_reader(db, reader_id=reader_id, removed_by=current_user.sub)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# The scanning device authenticates with the reader token alone.
@router.get("/by-token/{token}", response_model=QRReader)
def get_reader_by_token(token: str, db: Session = Depends(get_db)):
    return qr_reader_service.get_by_token(db, token=token)


@router.post("/by-token/{token}/scan", response_model=QRScanResult)
def scan_badge(token: str, scan_in: QRScan, db: Session = Depends(get_db)):
    return qr_reader_service.scan(db, token=token, payload=scan_in)
