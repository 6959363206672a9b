"""
Database configuration for the appointment store.
"""

from pydantic import BaseModel

from .settings import Settings


class DatabaseConfig(BaseModel):
    """Appointment store connection settings."""

    appointments_db_path: str = "appointments.db"
    connection_timeout: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseConfig":
        return cls(
            appointments_db_path=settings.appointments_db_path,
            connection_timeout=settings.db_connection_timeout,
        )

    def get_appointments_db_url(self) -> str:
        """Get SQLite URL for the appointments database."""
        return f"sqlite:///{self.appointments_db_path}"
