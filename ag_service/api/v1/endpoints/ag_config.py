# ag_service/api/v1/endpoints/ag_config.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.api import deps
from ag_service.core.exceptions import NotFoundError
from ag_service.db.session import get_db
from ag_service.schemas.ag_config import AGConfig, AGConfigUpdate, ToggleRequest
from ag_service.schemas.token import TokenPayload

router = APIRouter(prefix="/ag-config", tags=["AG Config"])


@router.get("", response_model=AGConfig)
def get_config(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    config = crud.ag_config.get_current(db)
    if config is None:
        raise NotFoundError("AGConfig", "current")
    return config


@router.put("", response_model=AGConfig)
def upsert_config(
    config_in: AGConfigUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud.ag_config.upsert(db, obj_in=config_in, updated_by=current_user.sub)


@router.put("/registration", response_model=AGConfig)
def toggle_registration(
    toggle: ToggleRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud.ag_config.upsert(
        db,
        obj_in=AGConfigUpdate(registration_enabled=toggle.enabled),
        updated_by=current_user.sub,
    )


@router.put("/auto-approval", response_model=AGConfig)
def toggle_auto_approval(
    toggle: ToggleRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return crud.ag_config.upsert(
        db,
        obj_in=AGConfigUpdate(auto_approval=toggle.enabled),
        updated_by=current_user.sub,
    )
