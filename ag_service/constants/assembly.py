# ag_service/constants/assembly.py
"""
Constants for assemblies and their participant roster.
"""
from enum import Enum


class AssemblyType(str, Enum):
    """AG is held in person, AGE (extraordinary) online."""
    AG = "AG"
    AGE = "AGE"


class AssemblyStatus(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"


class CommitteeStatus(str, Enum):
    """Full-standing committees vote; non-full-standing ones do not."""
    PLENO = "Pleno"
    NAO_PLENO = "Não-pleno"

    @classmethod
    def normalize(cls, value: str | None) -> "CommitteeStatus":
        """Anything that is not exactly 'Pleno' counts as 'Não-pleno'."""
        return cls.PLENO if value == cls.PLENO.value else cls.NAO_PLENO
