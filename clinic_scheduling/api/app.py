"""
FastAPI application factory and configuration.
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_settings
from ..services.scheduling import SchedulingService, create_scheduling_service
from ..utils.logging import configure_logging
from .errors import register_error_handlers
from .handlers import AppointmentsHandler, ClinicsHandler, HealthHandler
from .middleware import LoggingMiddleware, SecurityHeaders


def create_app(service: Optional[SchedulingService] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    service = service or create_scheduling_service(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Appointment scheduling for sublet clinic rooms",
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.scheduling = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeaders)
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    health_handler = HealthHandler(service)
    appointments_handler = AppointmentsHandler(service)
    clinics_handler = ClinicsHandler(service)

    app.include_router(health_handler.router, prefix="/health", tags=["health"])
    app.include_router(appointments_handler.router, prefix="/appointments", tags=["appointments"])
    app.include_router(clinics_handler.router, prefix="/clinics", tags=["clinics"])

    return app
