# ag_service/models/__init__.py
# Import all models so SQLAlchemy can resolve relationships.

from ag_service.db.base_class import Base
from ag_service.models.assembly import Assembly
from ag_service.models.assembly_participant import AssemblyParticipant
from ag_service.models.registration_modality import RegistrationModality
from ag_service.models.registration import Registration
from ag_service.models.ag_config import AGConfig
from ag_service.models.ag_session import AGSession
from ag_service.models.session_attendance import SessionAttendance
from ag_service.models.roll_call import RollCallEntry
from ag_service.models.qr_reader import QRReader
