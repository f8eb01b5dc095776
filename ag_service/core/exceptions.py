# ag_service/core/exceptions.py
"""
Application errors and their HTTP rendering.

Services raise these; the handlers registered in ``ag_service.main`` turn
them into structured JSON responses. Participant-facing flows (self
check-in) return soft ``{success, error}`` payloads instead of raising.
"""

import logging
from typing import Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorCategory:
    """Error categories for structured error handling"""
    VALIDATION = "validation_error"
    NOT_FOUND = "not_found_error"
    CONFLICT = "conflict_error"
    REGISTRATION_CLOSED = "registration_closed_error"
    INVALID_TRANSITION = "invalid_transition_error"
    DATABASE = "database_error"
    REPORT = "report_error"
    INTERNAL = "internal_error"


class AppError(Exception):
    """Base application error with structured information"""

    def __init__(
        self,
        message: str,
        category: str = ErrorCategory.INTERNAL,
        status_code: int = 500,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.category = category
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppError):
    """An id did not resolve to an entity"""
    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            message=f"{entity} not found",
            category=ErrorCategory.NOT_FOUND,
            status_code=404,
            details={"entity": entity, "id": entity_id},
        )


class ConflictError(AppError):
    """The operation clashes with existing state"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            message=message,
            category=ErrorCategory.CONFLICT,
            status_code=409,
            details=details,
        )


class ValidationError(AppError):
    """Validation errors"""
    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            category=ErrorCategory.VALIDATION,
            status_code=400,
            details=details,
        )


class RegistrationClosedError(AppError):
    """Registrations are not being accepted"""
    def __init__(self, message: str):
        super().__init__(
            message=message,
            category=ErrorCategory.REGISTRATION_CLOSED,
            status_code=409,
        )


class InvalidTransitionError(AppError):
    """A registration status change that the lifecycle does not allow"""
    def __init__(self, current: str, target: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"Cannot move registration from {current} to {target}",
            category=ErrorCategory.INVALID_TRANSITION,
            status_code=409,
            details={"current": current, "target": target},
        )


class ReportGenerationError(AppError):
    """Building a spreadsheet export failed"""
    def __init__(self, message: str = "Failed to generate report"):
        super().__init__(
            message=message,
            category=ErrorCategory.REPORT,
            status_code=500,
        )


def _error_body(category: str, message: str, details: Optional[dict] = None) -> dict:
    return {"error": {"category": category, "message": message, "details": details or {}}}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an AppError raised anywhere below an endpoint."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{exc.category} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.category, exc.message, exc.details),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}", exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=_error_body(ErrorCategory.DATABASE, "Database operation failed"),
    )
