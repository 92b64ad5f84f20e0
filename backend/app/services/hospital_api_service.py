"""
Clients for Hospital A's external patient registry.

``HospitalAPIClient`` talks to the real API over HTTP. ``MockHospitalAPIClient``
serves a fixed fixture for environments without network access. Both expose
the same ``search_patient`` coroutine so the resolution flow never knows which
one it has.
"""

import logging
from datetime import date
from typing import Optional, Protocol
from urllib.parse import quote
import httpx
from pydantic import ValidationError
from app.config import Settings
from app.exceptions import NotFoundError, UpstreamUnavailableError
from app.schemas.patient import PatientSearchResponse

logger = logging.getLogger(__name__)


class HospitalAPI(Protocol):
    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        """Raise NotFoundError when the registry has no such patient,
        UpstreamUnavailableError when the registry cannot answer."""
        ...


class HospitalAPIClient:
    """Client for Hospital A's patient search API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "HospitalAPIClient":
        return cls(settings.hospital_a_base_url, timeout=settings.hospital_api_timeout_seconds)

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        url = f"{self.base_url}/patient/search/{quote(identifier, safe='')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            logger.warning("Hospital API timed out after %ss", self.timeout)
            raise UpstreamUnavailableError("hospital API timed out") from e
        except httpx.HTTPError as e:
            logger.warning("Hospital API request failed: %s", e)
            raise UpstreamUnavailableError() from e

        if response.status_code == 404:
            raise NotFoundError("patient not found")
        if response.status_code != 200:
            logger.warning("Hospital API returned status %d", response.status_code)
            raise UpstreamUnavailableError(f"hospital API returned status {response.status_code}")

        try:
            return PatientSearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Hospital API returned an unreadable body: %s", e)
            raise UpstreamUnavailableError("hospital API returned an invalid response") from e


MOCK_PATIENT = PatientSearchResponse(
    first_name_th="สมชาย",
    middle_name_th="",
    last_name_th="ใจดี",
    first_name_en="Somchai",
    middle_name_en="",
    last_name_en="Jaidee",
    date_of_birth=date(1990, 1, 1),
    patient_hn="HN12345",
    national_id="1234567890123",
    passport_id="AB1234567",
    phone_number="0812345678",
    email="somchai@example.com",
    gender="M",
)


class MockHospitalAPIClient:
    """Fixture registry: knows exactly one patient, by either identifier."""

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        if identifier in (MOCK_PATIENT.national_id, MOCK_PATIENT.passport_id):
            return MOCK_PATIENT.model_copy()
        raise NotFoundError("patient not found")


def build_hospital_api(settings: Settings) -> HospitalAPI:
    if settings.use_mock_hospital_api:
        logger.info("Using mock hospital API")
        return MockHospitalAPIClient()
    return HospitalAPIClient.from_settings(settings)
