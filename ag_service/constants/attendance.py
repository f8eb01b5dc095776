# ag_service/constants/attendance.py
"""
Closed value sets for sessions and attendance records.
"""
from enum import Enum


class AttendanceState(str, Enum):
    """
    Four-state attendance model.

    ``NOT_COUNTING`` means the participant is on the roster but outside the
    quorum calculation. It is not the same as ``ABSENT``.
    """
    PRESENT = "present"
    ABSENT = "absent"
    EXCLUDED = "excluded"
    NOT_COUNTING = "not-counting"

    @classmethod
    def all_values(cls) -> list[str]:
        return [s.value for s in cls]


class SessionType(str, Enum):
    PLENARIA = "plenaria"
    SESSAO = "sessao"
    AVULSA = "avulsa"


class SessionStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class ParticipantType(str, Enum):
    EB = "eb"
    CR = "cr"
    COMITE = "comite"
    INDIVIDUAL = "individual"
    USER = "user"

    @classmethod
    def roster_types(cls) -> list[str]:
        """Types that appear on the imported assembly roster."""
        return [cls.EB.value, cls.CR.value, cls.COMITE.value]
