"""
Clinic directory collaborator.
"""

from .service import ClinicDirectoryService

__all__ = ["ClinicDirectoryService"]
