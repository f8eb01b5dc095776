# ag_service/crud/crud_qr_reader.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.qr_reader import QRReader
from ag_service.schemas.qr_reader import QRReaderCreate


class CRUDQRReader(CRUDBase[QRReader, QRReaderCreate, QRReaderCreate]):
    def get_active(self, db: Session, *, session_id: Optional[str] = None) -> List[QRReader]:
        query = db.query(self.model).filter(self.model.is_active.is_(True))
        if session_id:
            query = query.filter(self.model.session_id == session_id)
        return query.order_by(self.model.created_at.desc()).all()

    def get_by_token(self, db: Session, *, token: str) -> Optional[QRReader]:
        return (
            db.query(self.model)
            .filter(self.model.token == token, self.model.is_active.is_(True))
            .first()
        )

    def remove_active(self, db: Session) -> int:
        deleted = (
            db.query(self.model)
            .filter(self.model.is_active.is_(True))
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


qr_reader = CRUDQRReader(QRReader)
