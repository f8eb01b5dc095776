# ag_service/crud/crud_assembly.py
from typing import List, Optional
from sqlalchemy.orm import Session

from .base import CRUDBase
from ag_service.models.assembly import Assembly
from ag_service.schemas.assembly import AssemblyCreate, AssemblyUpdate
from ag_service.utils.time import utcnow


class CRUDAssembly(CRUDBase[Assembly, AssemblyCreate, AssemblyUpdate]):
    def get_multi_by_status(
        self, db: Session, *, status: Optional[str] = None
    ) -> List[Assembly]:
        query = db.query(self.model)
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.start_date.desc()).all()

    def create_with_owner(
        self, db: Session, *, obj_in: AssemblyCreate, created_by: str
    ) -> Assembly:
        data = obj_in.model_dump()
        if data.get("payment_required") is None:
            data["payment_required"] = obj_in.type.value == "AG"
        data["type"] = obj_in.type.value
        now = utcnow()
        db_obj = self.model(
            **data,
            status="active",
            created_at=now,
            created_by=created_by,
            last_updated=now,
            last_updated_by=created_by,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def next_modality_order(self, db: Session, *, db_obj: Assembly, current_max: int) -> int:
        """Reserve the next modality order for the assembly (not committed)."""
        next_order = max(current_max, db_obj.modality_order_counter or 0) + 1
        db_obj.modality_order_counter = next_order
        db.add(db_obj)
        return next_order


assembly = CRUDAssembly(Assembly)
