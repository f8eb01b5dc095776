# ag_service/crud/crud_ag_config.py
from typing import Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.ag_config import AGConfig
from ag_service.schemas.ag_config import AGConfigUpdate
from ag_service.utils.time import utcnow


class CRUDAGConfig(CRUDBase[AGConfig, AGConfigUpdate, AGConfigUpdate]):
    def get_current(self, db: Session) -> Optional[AGConfig]:
        return db.query(self.model).order_by(self.model.created_at).first()

    def upsert(self, db: Session, *, obj_in: AGConfigUpdate, updated_by: str) -> AGConfig:
        data = obj_in.model_dump(exclude_unset=True)
        data["updated_at"] = utcnow()
        data["updated_by"] = updated_by
        current = self.get_current(db)
        if current:
            return self.update(db, db_obj=current, obj_in=data)
        return self.create(db, obj_in=data)


ag_config = CRUDAGConfig(AGConfig)
