# ag_service/api/v1/endpoints/reports.py
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from ag_service.api import deps
from ag_service.db.session import get_db
from ag_service.schemas.report import AGReportResult
from ag_service.schemas.token import TokenPayload
from ag_service.services import report_service, roll_call_service
from ag_service.services.session_service import engine as attendance_engine

router = APIRouter(tags=["Reports"])
logger = logging.getLogger(__name__)


def _xlsx_response(result: AGReportResult) -> StreamingResponse:
    return StreamingResponse(
        result.buffer,
        media_type=report_service.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/ag-sessions/{session_id}/report")
def export_session_report(
    session_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Attendance workbook for a session: one sheet per group (EB, CR, full
    and non-full committees), or a single participants sheet for a sessão.
    """
    report_input = attendance_engine.build_report_input(db, session_id=session_id)
    result = report_service.generate_ag_report(report_input)
    logger.info(f"Session report {result.filename} exported by {current_user.sub}")
    return _xlsx_response(result)


@router.get("/roll-call/report")
def export_roll_call_report(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    report_input = roll_call_service.build_avulsa_report_input(db)
    return _xlsx_response(report_service.generate_ag_report(report_input))


@router.get("/assemblies/{assembly_id}/report")
def export_assembly_report(
    assembly_id: str,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Full export of an assembly: details, roster, registrations, modalities and settings."""
    result = report_service.generate_assembly_report(db, assembly_id=assembly_id)
    logger.info(f"Assembly report {result.filename} exported by {current_user.sub}")
    return _xlsx_response(result)
