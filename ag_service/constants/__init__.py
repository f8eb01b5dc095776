# ag_service/constants/__init__.py

from .assembly import AssemblyStatus, AssemblyType, CommitteeStatus
from .attendance import AttendanceState, ParticipantType, SessionStatus, SessionType
from .registration import (
    ACTIVE_EXCLUDED_STATUSES,
    REVIEW_QUEUE_STATUSES,
    RegistrationStatus,
    can_transition,
)
