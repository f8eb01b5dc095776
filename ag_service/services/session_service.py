# ag_service/services/session_service.py
"""
Session & attendance engine.

Sessions come in three kinds:

* ``plenaria`` seeds one row per roster participant (eb, cr and comite).
  A committee row stands for the whole local committee and carries its own
  id in ``comite_local``.
* ``sessao`` seeds one ``individual`` row per *approved* registration, keyed
  by the registration id.
* ``avulsa`` (or any session without an assembly) starts empty and grows as
  operators mark people or participants check in.

Seeded rows start as ``not-counting``: on the roster, outside the quorum.

The engine only talks to the repository interfaces in
``ag_service.crud.protocols``; the module-level ``engine`` wires in the
SQLAlchemy implementations.
"""
import logging
from collections import Counter
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import (
    AttendanceState,
    CommitteeStatus,
    ParticipantType,
    RegistrationStatus,
    SessionStatus,
    SessionType,
)
from ag_service.core.exceptions import NotFoundError
from ag_service.crud.protocols import (
    AssemblyRepo,
    AttendanceRepo,
    ParticipantRepo,
    RegistrationRepo,
    SessionRepo,
)
from ag_service.schemas.attendance import (
    AttendanceRecord,
    EnrichedAttendanceRecord,
    EnrichedSession,
    RegistrationContact,
    SelfCheckInResult,
)
from ag_service.schemas.report import (
    AvulsaReportInput,
    ReportRow,
    RosterStatus,
    SessionReportInput,
)
from ag_service.schemas.session import (
    AGSession,
    AGSessionWithStats,
    AttendanceCounts,
    OrganizedAttendance,
    UserAttendanceStats,
    UserSessionAttendance,
)
from ag_service.utils.time import utcnow

logger = logging.getLogger(__name__)


class SessionAttendanceEngine:
    def __init__(
        self,
        *,
        assemblies: AssemblyRepo,
        sessions: SessionRepo,
        attendance: AttendanceRepo,
        participants: ParticipantRepo,
        registrations: RegistrationRepo,
    ):
        self.assemblies = assemblies
        self.sessions = sessions
        self.attendance = attendance
        self.participants = participants
        self.registrations = registrations

    # ------------------------------------------------------------------ #
    # Sessions
    # ------------------------------------------------------------------ #

    def get_session(self, db: Session, *, session_id: str):
        session = self.sessions.get(db, session_id)
        if session is None:
            raise NotFoundError("Session", session_id)
        return session

    def list_sessions(self, db: Session, *, assembly_id: str, active_only: bool = False):
        """Sessions of an assembly, newest first."""
        return self.sessions.get_by_assembly(db, assembly_id=assembly_id, active_only=active_only)

    def get_standalone_sessions(self, db: Session):
        return self.sessions.get_standalone(db)

    def create_session(
        self,
        db: Session,
        *,
        name: str,
        type: SessionType,
        created_by: str,
        assembly_id: Optional[str] = None,
    ) -> str:
        session_type = SessionType(type)
        if assembly_id and self.assemblies.get(db, assembly_id) is None:
            raise NotFoundError("Assembly", assembly_id)
        session = self.sessions.create_active(
            db,
            name=name,
            type=session_type.value,
            created_by=created_by,
            assembly_id=assembly_id,
        )

        rows: List[dict] = []
        if assembly_id and session_type == SessionType.PLENARIA:
            rows = self._plenaria_rows(db, assembly_id=assembly_id, created_by=created_by)
        elif assembly_id and session_type == SessionType.SESSAO:
            rows = self._sessao_rows(db, assembly_id=assembly_id, created_by=created_by)

        if rows:
            for row in rows:
                row["session_id"] = session.id
                row["assembly_id"] = assembly_id
            self.attendance.bulk_create(db, rows=rows)

        logger.info(
            f"Created {session_type.value} session {session.id} ('{name}') "
            f"with {len(rows)} seeded attendance rows"
        )
        return session.id

    def _seed_row(self, *, created_by: str, **fields) -> dict:
        now = utcnow()
        return {
            **fields,
            "attendance": AttendanceState.NOT_COUNTING.value,
            "marked_at": now,
            "marked_by": created_by,
            "last_updated": now,
            "last_updated_by": created_by,
        }

    def _plenaria_rows(self, db: Session, *, assembly_id: str, created_by: str) -> List[dict]:
        roster = self.participants.get_by_assembly(
            db, assembly_id=assembly_id, types=ParticipantType.roster_types()
        )
        rows = []
        for p in roster:
            is_committee = p.type == ParticipantType.COMITE.value
            rows.append(
                self._seed_row(
                    created_by=created_by,
                    participant_id=p.participant_id,
                    participant_type=p.type,
                    participant_name=p.name,
                    participant_role=p.role,
                    participant_status=p.status,
                    comite_local=p.participant_id if is_committee else None,
                    escola=p.escola,
                    regional=p.regional,
                    cidade=p.cidade,
                    uf=p.uf,
                )
            )
        return rows

    def _sessao_rows(self, db: Session, *, assembly_id: str, created_by: str) -> List[dict]:
        approved = self.registrations.get_by_assembly(
            db, assembly_id=assembly_id, status=RegistrationStatus.APPROVED.value
        )
        return [
            self._seed_row(
                created_by=created_by,
                participant_id=r.id,
                participant_type=ParticipantType.INDIVIDUAL.value,
                participant_name=r.participant_name,
                participant_role=r.participant_role,
                participant_status=r.participant_status,
                comite_local=r.comite_local,
                escola=r.escola,
                regional=r.regional,
                cidade=r.cidade,
                uf=r.uf,
            )
            for r in approved
        ]

    def archive_session(self, db: Session, *, session_id: str, archived_by: str):
        session = self.get_session(db, session_id=session_id)
        archived = self.sessions.update(
            db,
            db_obj=session,
            obj_in={
                "status": SessionStatus.ARCHIVED.value,
                "archived_at": utcnow(),
                "archived_by": archived_by,
            },
        )
        logger.info(f"Session {session_id} archived by {archived_by}")
        return archived

    def reopen_session(self, db: Session, *, session_id: str, reopened_by: str):
        session = self.get_session(db, session_id=session_id)
        reopened = self.sessions.update(
            db,
            db_obj=session,
            obj_in={"status": SessionStatus.ACTIVE.value, "archived_at": None, "archived_by": None},
        )
        logger.info(f"Session {session_id} reopened by {reopened_by}")
        return reopened

    def delete_session(self, db: Session, *, session_id: str, deleted_by: str) -> int:
        """
        Delete a session and its attendance rows.

        The two deletes are committed separately, attendance first, so an
        interruption can leave an empty session but never orphaned rows.
        """
        self.get_session(db, session_id=session_id)
        removed = self.attendance.remove_by_session(db, session_id=session_id)
        self.sessions.remove(db, id=session_id)
        logger.info(
            f"Session {session_id} deleted by {deleted_by} ({removed} attendance rows removed)"
        )
        return removed

    # ------------------------------------------------------------------ #
    # Marking attendance
    # ------------------------------------------------------------------ #

    def mark_attendance(
        self,
        db: Session,
        *,
        session_id: str,
        participant_id: str,
        participant_type: ParticipantType,
        participant_name: str,
        attendance: AttendanceState,
        marked_by: str,
        participant_role: Optional[str] = None,
    ) -> str:
        """Operator upsert keyed by (session, participant, type). Any state may follow any other."""
        session = self.get_session(db, session_id=session_id)
        state = AttendanceState(attendance).value
        now = utcnow()

        record, created = self.attendance.find_or_create(
            db,
            session_id=session_id,
            participant_id=participant_id,
            participant_type=ParticipantType(participant_type).value,
            defaults={
                "assembly_id": session.assembly_id,
                "participant_name": participant_name,
                "participant_role": participant_role,
                "attendance": state,
                "marked_at": now,
                "marked_by": marked_by,
                "last_updated": now,
                "last_updated_by": marked_by,
            },
        )
        if not created:
            record = self.attendance.set_attendance(
                db, db_obj=record, attendance=state, updated_by=marked_by
            )
        return record.id

    def mark_self_attendance(
        self,
        db: Session,
        *,
        session_id: str,
        participant_id: str,
        participant_name: str,
        participant_type: ParticipantType = ParticipantType.USER,
    ) -> SelfCheckInResult:
        """
        Participant check-in. Never raises for business failures; the
        participant gets a readable error instead.
        """
        session = self.sessions.get(db, session_id)
        if session is None:
            logger.warning(f"Self check-in rejected: session {session_id} not found")
            return SelfCheckInResult(success=False, error="Session not found")
        if session.status != SessionStatus.ACTIVE.value:
            logger.warning(f"Self check-in rejected: session {session_id} is {session.status}")
            return SelfCheckInResult(success=False, error="Session is not active")

        present = AttendanceState.PRESENT.value
        now = utcnow()
        record, created = self.attendance.find_or_create(
            db,
            session_id=session_id,
            participant_id=participant_id,
            participant_type=ParticipantType(participant_type).value,
            defaults={
                "assembly_id": session.assembly_id,
                "participant_name": participant_name,
                "attendance": present,
                "marked_at": now,
                "marked_by": participant_id,
                "last_updated": now,
                "last_updated_by": participant_id,
            },
            match_type=False,
        )
        if not created and record.attendance != present:
            record = self.attendance.set_attendance(
                db, db_obj=record, attendance=present, updated_by=participant_id
            )
        return SelfCheckInResult(success=True, record_id=record.id)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get_session_with_stats(
        self, db: Session, *, session_id: str
    ) -> Optional[AGSessionWithStats]:
        session = self.sessions.get(db, session_id)
        if session is None:
            return None
        records = self.attendance.get_by_session(db, session_id=session_id)
        counts = Counter(r.attendance for r in records)
        return AGSessionWithStats(
            session=AGSession.model_validate(session),
            stats=AttendanceCounts(
                total=len(records),
                present=counts[AttendanceState.PRESENT.value],
                absent=counts[AttendanceState.ABSENT.value],
                excluded=counts[AttendanceState.EXCLUDED.value],
                not_counting=counts[AttendanceState.NOT_COUNTING.value],
            ),
            records=[AttendanceRecord.model_validate(r) for r in records],
        )

    def get_session_attendance(self, db: Session, *, session_id: str) -> OrganizedAttendance:
        self.get_session(db, session_id=session_id)
        records = self.attendance.get_by_session(db, session_id=session_id)
        organized = OrganizedAttendance()
        buckets = {
            ParticipantType.EB.value: organized.ebs,
            ParticipantType.CR.value: organized.crs,
            ParticipantType.COMITE.value: organized.comites,
        }
        for record in sorted(records, key=lambda r: (r.participant_name or "").lower()):
            target = buckets.get(record.participant_type, organized.participantes)
            target.append(AttendanceRecord.model_validate(record))
        return organized

    def get_user_attendance_stats(
        self, db: Session, *, assembly_id: str, user_id: str
    ) -> UserAttendanceStats:
        """
        Attendance of one person across an assembly.

        A user may have attended some sessions as a registered delegate
        (rows keyed by registration id) and others as a walk-in (rows keyed
        by user id with type ``user``). Both are merged per session; a
        session counts once and counts as attended if either row is present.
        """
        registrations = self.registrations.get_by_assembly_and_participant(
            db, assembly_id=assembly_id, participant_id=user_id
        )
        user_rows = self.attendance.get_by_assembly_and_participants(
            db,
            assembly_id=assembly_id,
            participant_ids=[user_id],
            participant_type=ParticipantType.USER.value,
        )
        rows = list(user_rows)
        if registrations:
            rows.extend(
                self.attendance.get_by_assembly_and_participants(
                    db,
                    assembly_id=assembly_id,
                    participant_ids=[r.id for r in registrations],
                )
            )

        by_session: Dict[str, object] = {}
        for row in rows:
            current = by_session.get(row.session_id)
            if current is None or (
                row.attendance == AttendanceState.PRESENT.value
                and current.attendance != AttendanceState.PRESENT.value
            ):
                by_session[row.session_id] = row

        sessions = {
            s.id: s for s in self.sessions.get_by_ids(db, ids=list(by_session.keys()))
        }
        details = []
        for session_id, row in by_session.items():
            session = sessions.get(session_id)
            details.append(
                UserSessionAttendance(
                    session_id=session_id,
                    session_name=session.name if session else None,
                    session_type=session.type if session else None,
                    attendance=row.attendance,
                    attended=row.attendance == AttendanceState.PRESENT.value,
                    marked_at=row.marked_at,
                )
            )
        details.sort(key=lambda d: (d.marked_at is None, d.marked_at))

        total = len(details)
        attended = sum(1 for d in details if d.attended)
        percentage = round(attended / total * 100, 2) if total else 0.0
        return UserAttendanceStats(
            total_sessions=total,
            attended_sessions=attended,
            attendance_percentage=percentage,
            sessions=details,
        )

    def get_session_with_enriched_data(self, db: Session, *, session_id: str) -> EnrichedSession:
        """
        Attendance rows of a session, with registration contact data joined
        onto the individual rows of a sessão. A row whose registration
        cannot be loaded is returned bare.
        """
        session = self.get_session(db, session_id=session_id)
        records = self.attendance.get_by_session(db, session_id=session_id)
        enriched = []
        for record in records:
            item = EnrichedAttendanceRecord.model_validate(record)
            if (
                session.type == SessionType.SESSAO.value
                and record.participant_type == ParticipantType.INDIVIDUAL.value
            ):
                item.registration = self._registration_contact(db, record.participant_id)
            enriched.append(item)
        return EnrichedSession(
            session_id=session.id,
            session_name=session.name,
            session_type=session.type,
            records=enriched,
        )

    def _registration_contact(self, db: Session, registration_id: str) -> Optional[RegistrationContact]:
        try:
            registration = self.registrations.get(db, registration_id)
        except SQLAlchemyError as e:
            # Leave the session usable for the remaining rows
            db.rollback()
            logger.warning(f"Could not load registration {registration_id} for enrichment: {e}")
            return None
        if registration is None:
            logger.warning(f"Registration {registration_id} not found, keeping bare attendance row")
            return None
        return RegistrationContact(
            registration_id=registration.id,
            email=registration.email,
            celular=registration.celular,
            escola=registration.escola,
            regional=registration.regional,
            cidade=registration.cidade,
            uf=registration.uf,
            comite_local=registration.comite_local,
            modality_id=registration.modality_id,
        )

    def build_report_input(
        self, db: Session, *, session_id: str
    ) -> Union[SessionReportInput, AvulsaReportInput]:
        """Snapshot a session into the report generator's input."""
        session = self.get_session(db, session_id=session_id)
        rows = [
            ReportRow.model_validate(r)
            for r in self.attendance.get_by_session(db, session_id=session_id)
        ]

        if session.type == SessionType.AVULSA.value:
            report = AvulsaReportInput(name=session.name)
            for row in rows:
                if row.participant_type == ParticipantType.EB.value:
                    report.ebs.append(row)
                elif row.participant_type == ParticipantType.CR.value:
                    report.crs.append(row)
                elif row.participant_type == ParticipantType.COMITE.value:
                    if CommitteeStatus.normalize(row.participant_status) == CommitteeStatus.PLENO:
                        report.comites_plenos.append(row)
                    else:
                        report.comites_nao_plenos.append(row)
                else:
                    report.participantes.append(row)
            return report

        roster = None
        if session.type == SessionType.PLENARIA.value and session.assembly_id:
            roster = [
                RosterStatus(participant_id=p.participant_id, status=p.status)
                for p in self.participants.get_by_assembly(
                    db, assembly_id=session.assembly_id, types=[ParticipantType.COMITE.value]
                )
            ]
        return SessionReportInput(
            session_name=session.name,
            session_type=session.type,
            records=rows,
            committee_roster=roster,
        )


engine = SessionAttendanceEngine(
    assemblies=crud.assembly,
    sessions=crud.ag_session,
    attendance=crud.attendance,
    participants=crud.participant,
    registrations=crud.registration,
)
