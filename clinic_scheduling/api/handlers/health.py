"""
Health check handler.
"""

from datetime import datetime

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...config import get_settings
from ...core.exceptions import StoreError
from ...services.scheduling import SchedulingService


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    uptime: float


class HealthHandler:
    """Liveness and readiness endpoints."""

    def __init__(self, service: SchedulingService):
        self.settings = get_settings()
        self.service = service
        self.start_time = datetime.now()
        self.router = APIRouter()
        self._setup_routes()

    def _setup_routes(self):
        @self.router.get("/", response_model=HealthResponse)
        async def health_check():
            uptime = (datetime.now() - self.start_time).total_seconds()
            return HealthResponse(
                status="healthy",
                timestamp=datetime.now().isoformat(),
                version=self.settings.app_version,
                uptime=uptime,
            )

        @self.router.get("/ready")
        async def readiness_check():
            """Ready once the appointment store answers."""
            try:
                await self.service.store.ping()
            except StoreError as e:
                return JSONResponse(
                    status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                    content={"status": "unavailable", "detail": str(e)},
                )
            return {"status": "ready"}

        @self.router.get("/live")
        async def liveness_check():
            return {"status": "alive"}
