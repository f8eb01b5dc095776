# ag_service/api/v1/api.py

from fastapi import APIRouter
from ag_service.api.v1.endpoints import (
    ag_config,
    assemblies,
    modalities,
    qr_readers,
    registrations,
    reports,
    roll_call,
    sessions,
)

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(assemblies.router)
api_router.include_router(modalities.router)
api_router.include_router(registrations.router)
api_router.include_router(ag_config.router)
api_router.include_router(sessions.router)
api_router.include_router(reports.router)
api_router.include_router(roll_call.router)
api_router.include_router(qr_readers.router)
