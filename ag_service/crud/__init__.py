# ag_service/crud/__init__.py

from .crud_ag_config import ag_config
from .crud_ag_session import ag_session
from .crud_assembly import assembly
from .crud_attendance import attendance
from .crud_modality import modality
from .crud_participant import participant
from .crud_qr_reader import qr_reader
from .crud_registration import registration
from .crud_roll_call import roll_call
