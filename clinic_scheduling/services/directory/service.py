"""
Clinic directory client.

Clinics and their owners live in the backend-as-a-service; this client only
reads them through its REST interface.
"""

from typing import Any, Dict, List, Optional
import httpx

from ...config import Settings, get_settings
from ...core.exceptions import DirectoryError
from ...core.models import Clinic
from ...utils.logging import get_logger

logger = get_logger("clinic.directory")

CLINIC_FIELDS = "id,user_id,title,price,availability,hasappointment"


class ClinicDirectoryService:
    """Read-only access to clinic records and ownership."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.base_url = self.settings.directory_api_base.rstrip("/")
        self.timeout = self.settings.directory_timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        key = self.settings.directory_api_key
        if key:
            headers["apikey"] = key
            headers["Authorization"] = f"Bearer {key}"
        return headers

    async def _make_request(self, path: str, params: Dict[str, str]) -> Any:
        """GET a REST resource with error handling."""
        url = f"{self.base_url}/rest/v1/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers=self._headers())
                response.raise_for_status()
                return response.json()
        except httpx.TimeoutException as e:
            logger.error("directory request timed out: %s", url)
            raise DirectoryError("Clinic directory request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error("directory HTTP %s for %s", e.response.status_code, url)
            raise DirectoryError(f"Clinic directory HTTP error {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("directory request failed for %s: %s", url, e)
            raise DirectoryError(f"Clinic directory request failed: {e}") from e

    async def get_clinic(self, clinic_id: str) -> Optional[Clinic]:
        """Fetch one clinic, or None if it does not exist."""
        rows = await self._make_request(
            "clinics", {"id": f"eq.{clinic_id}", "select": CLINIC_FIELDS}
        )
        if not isinstance(rows, list):
            raise DirectoryError(f"Malformed clinic response for {clinic_id}")
        if not rows:
            return None
        try:
            return Clinic.from_api_response(rows[0])
        except (KeyError, ValueError) as e:
            raise DirectoryError(f"Malformed clinic record {clinic_id}: {e}") from e

    async def list_owned_clinic_ids(self, user_id: str) -> List[str]:
        """Ids of every clinic owned by ``user_id``."""
        rows = await self._make_request(
            "clinics", {"user_id": f"eq.{user_id}", "select": "id"}
        )
        if not isinstance(rows, list):
            raise DirectoryError(f"Malformed clinic list for owner {user_id}")
        return [str(r["id"]) for r in rows if isinstance(r, dict) and r.get("id")]

    async def is_owner(self, clinic_id: str, user_id: str) -> bool:
        if not user_id:
            return False
        clinic = await self.get_clinic(clinic_id)
        return clinic is not None and clinic.owner_id == user_id
