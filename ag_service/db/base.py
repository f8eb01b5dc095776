# ag_service/db/base.py
# Import every model so Base.metadata is complete for Alembic and create_all.

from ag_service.db.base_class import Base  # noqa: F401
from ag_service.models import (  # noqa: F401
    Assembly,
    AssemblyParticipant,
    RegistrationModality,
    Registration,
    AGConfig,
    AGSession,
    SessionAttendance,
    RollCallEntry,
    QRReader,
)
