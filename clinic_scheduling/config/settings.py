"""
Application settings and configuration.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application
    app_name: str = "Clinic Scheduling"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False)

    # Appointment store
    appointments_db_path: str = Field(default="appointments.db")
    db_connection_timeout: float = Field(default=30.0)

    # Clinic directory (backend-as-a-service REST endpoint)
    directory_api_base: str = Field(default="http://localhost:54321")
    directory_api_key: Optional[str] = Field(default=None)
    directory_timeout: float = Field(default=10.0)

    # Scheduling
    slot_step_minutes: int = Field(default=30, gt=0, le=24 * 60)

    # Events
    event_log_path: str = Field(default="clinic_events.jsonl")

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
