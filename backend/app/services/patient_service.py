"""
Patient identity resolution.

A search is answered from the local patient store when possible. On a miss the
hospital's external registry is queried and the answer is cached locally so
the next lookup for the same identifier stays local. Cached rows are trusted
indefinitely: there is no TTL and no re-check against the registry.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from app.exceptions import AppError, InvalidInputError, NotFoundError, UpstreamUnavailableError
from app.models.patient import Patient
from app.repositories.base import PatientStore
from app.schemas.patient import PatientSearchResponse
from app.services.hospital_api_service import HospitalAPI

logger = logging.getLogger(__name__)

NATIONAL_ID_LENGTH = 13


class IdentifierKind(str, Enum):
    NATIONAL_ID = "national_id"
    PASSPORT_ID = "passport_id"


@dataclass(frozen=True)
class IdentifierQuery:
    value: str
    kind: IdentifierKind


def is_national_id(value: str) -> bool:
    """Shape check only, the national ID checksum is not validated."""
    return len(value) == NATIONAL_ID_LENGTH and value.isascii() and value.isdigit()


def classify_identifier(raw: Optional[str]) -> IdentifierQuery:
    value = (raw or "").strip()
    if not value:
        raise InvalidInputError("patient id is required")
    if is_national_id(value):
        return IdentifierQuery(value, IdentifierKind.NATIONAL_ID)
    return IdentifierQuery(value, IdentifierKind.PASSPORT_ID)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class PatientService:
    def __init__(self, patient_repo: PatientStore, hospital_api: HospitalAPI):
        self.patient_repo = patient_repo
        self.hospital_api = hospital_api

    async def search_patient(self, raw_id: str, hospital_id: int) -> PatientSearchResponse:
        """
        Resolve an identifier within ``hospital_id``.

        ``hospital_id`` must come from the caller's verified session. Raises
        InvalidInputError, NotFoundError or UpstreamUnavailableError.
        """
        query = classify_identifier(raw_id)

        patient = await self._find_local(query, hospital_id)
        if patient is not None:
            return PatientSearchResponse.model_validate(patient)

        logger.info("Patient not cached for hospital %s, querying hospital API", hospital_id)
        identity = await self._search_registry(query.value)

        await self._cache(identity, hospital_id)
        return identity

    async def _find_local(self, query: IdentifierQuery, hospital_id: int) -> Optional[Patient]:
        if query.kind is IdentifierKind.NATIONAL_ID:
            return await self.patient_repo.find_by_national_id(hospital_id, query.value)
        return await self.patient_repo.find_by_passport_id(hospital_id, query.value)

    async def _search_registry(self, identifier: str) -> PatientSearchResponse:
        try:
            return await self.hospital_api.search_patient(identifier)
        except (NotFoundError, UpstreamUnavailableError):
            raise
        except Exception as e:
            logger.warning("Hospital API lookup failed: %s", e)
            raise UpstreamUnavailableError() from e

    async def _cache(self, identity: PatientSearchResponse, hospital_id: int) -> None:
        # Best effort: the registry answer is returned whether or not this insert lands
        national_id = _blank_to_none(identity.national_id)
        passport_id = _blank_to_none(identity.passport_id)
        if national_id is None and passport_id is None:
            logger.warning("Hospital API returned a patient without identifiers, not caching")
            return

        patient = Patient(
            national_id=national_id,
            passport_id=passport_id,
            first_name_th=identity.first_name_th,
            middle_name_th=identity.middle_name_th,
            last_name_th=identity.last_name_th,
            first_name_en=identity.first_name_en,
            middle_name_en=identity.middle_name_en,
            last_name_en=identity.last_name_en,
            date_of_birth=identity.date_of_birth,
            patient_hn=identity.patient_hn,
            phone_number=identity.phone_number,
            email=identity.email,
            gender=identity.gender,
            hospital_id=hospital_id,
        )
        try:
            await self.patient_repo.create(patient)
        except AppError as e:
            logger.warning("Could not cache patient for hospital %s: %s", hospital_id, e.message)
        except Exception:
            logger.warning("Could not cache patient for hospital %s", hospital_id, exc_info=True)
