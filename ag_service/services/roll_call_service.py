# ag_service/services/roll_call_service.py
"""
Standalone roll call ("chamada avulsa") kept outside any assembly.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import AttendanceState, CommitteeStatus, ParticipantType
from ag_service.models.roll_call import RollCallEntry
from ag_service.schemas.report import AvulsaReportInput, ReportRow
from ag_service.schemas.roll_call import RollCallEntryIn
from ag_service.utils.time import utcnow

logger = logging.getLogger(__name__)


def list_entries(db: Session, *, type: Optional[str] = None) -> List[RollCallEntry]:
    return crud.roll_call.list_entries(db, type=type)


def upsert_entry(db: Session, *, entry: RollCallEntryIn, updated_by: str) -> RollCallEntry:
    """Patch the attendance of a known member, or add the member."""
    existing = crud.roll_call.get_by_member(db, type=entry.type, member_id=entry.member_id)
    if existing:
        return crud.roll_call.update(
            db,
            db_obj=existing,
            obj_in={
                "attendance": entry.attendance.value,
                "last_updated": utcnow(),
                "last_updated_by": updated_by,
            },
        )
    data = entry.model_dump(mode="json")
    data["last_updated"] = utcnow()
    data["last_updated_by"] = updated_by
    return crud.roll_call.create(db, obj_in=data)


def bulk_insert(db: Session, *, entries: List[RollCallEntryIn], updated_by: str) -> int:
    inserted = crud.roll_call.bulk_create(db, entries=entries, updated_by=updated_by)
    logger.info(f"Imported {inserted} roll call entries")
    return inserted


def reset_attendance(db: Session, *, updated_by: str) -> int:
    """Put every member back to not-counting, keeping the list."""
    affected = crud.roll_call.set_all_attendance(
        db, attendance=AttendanceState.NOT_COUNTING.value, updated_by=updated_by
    )
    logger.info(f"Roll call attendance reset by {updated_by} ({affected} entries)")
    return affected


def clear_all(db: Session, *, cleared_by: str) -> int:
    removed = crud.roll_call.remove_all(db)
    logger.info(f"Roll call cleared by {cleared_by} ({removed} entries)")
    return removed


def _report_row(entry: RollCallEntry) -> ReportRow:
    return ReportRow(
        participant_id=entry.member_id,
        participant_type=entry.type,
        participant_name=entry.name,
        participant_role=entry.role,
        participant_status=entry.status,
        escola=entry.escola,
        regional=entry.regional,
        cidade=entry.cidade,
        uf=entry.uf,
        attendance=entry.attendance,
        last_updated=entry.last_updated,
    )


def build_avulsa_report_input(db: Session) -> AvulsaReportInput:
    report = AvulsaReportInput()
    for entry in crud.roll_call.list_entries(db):
        row = _report_row(entry)
        if entry.type == ParticipantType.EB.value:
            report.ebs.append(row)
        elif entry.type == ParticipantType.CR.value:
            report.crs.append(row)
        elif CommitteeStatus.normalize(entry.status) == CommitteeStatus.PLENO:
            report.comites_plenos.append(row)
        else:
            report.comites_nao_plenos.append(row)
    return report
