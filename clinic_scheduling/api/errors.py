"""
Mapping of domain errors to HTTP responses.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AppointmentNotFoundError,
    BookingValidationError,
    ClinicNotFoundError,
    ExternalServiceError,
    IllegalTransitionError,
    SchedulingError,
    SchedulingPermissionError,
    SlotConflictError,
    StoreError,
)
from ..utils.logging import get_logger

logger = get_logger("clinic.api")

# first match wins, so subclasses come before their bases
_STATUS_BY_ERROR = (
    (AppointmentNotFoundError, status.HTTP_404_NOT_FOUND),
    (ClinicNotFoundError, status.HTTP_404_NOT_FOUND),
    (BookingValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (SlotConflictError, status.HTTP_409_CONFLICT),
    (SchedulingPermissionError, status.HTTP_403_FORBIDDEN),
    (IllegalTransitionError, status.HTTP_409_CONFLICT),
)


def status_for(error: SchedulingError) -> int:
    for error_cls, code in _STATUS_BY_ERROR:
        if isinstance(error, error_cls):
            return code
    return status.HTTP_400_BAD_REQUEST


def _error_body(code: str, detail: str) -> dict:
    return {"error": code, "detail": detail}


def register_error_handlers(app: FastAPI) -> None:
    """Install JSON error responses for scheduling, store and directory errors."""

    @app.exception_handler(SchedulingError)
    async def scheduling_error_handler(request: Request, exc: SchedulingError):
        return JSONResponse(
            status_code=status_for(exc),
            content=_error_body(exc.code, str(exc)),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("store error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_body(exc.code, "Appointment store unavailable, try again"),
        )

    @app.exception_handler(ExternalServiceError)
    async def external_error_handler(request: Request, exc: ExternalServiceError):
        logger.error("external error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_body(exc.code, "Clinic directory unavailable, try again"),
        )
