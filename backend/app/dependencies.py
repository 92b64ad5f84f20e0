"""
FastAPI dependency providers.

Settings are read once and handed to each component's constructor. Tests swap
any of these out through ``app.dependency_overrides``.
"""

from functools import lru_cache
from fastapi import Depends
from app.config import get_settings
from app.database import async_session
from app.repositories import PatientRepository, StaffRepository
from app.services.auth_service import AuthService
from app.services.hospital_api_service import HospitalAPI, build_hospital_api
from app.services.patient_service import PatientService
from app.services.session_manager import SessionManager


@lru_cache()
def get_session_manager() -> SessionManager:
    return SessionManager.from_settings(get_settings())


@lru_cache()
def get_hospital_api() -> HospitalAPI:
    return build_hospital_api(get_settings())


def get_staff_repository() -> StaffRepository:
    return StaffRepository(async_session)


def get_patient_repository() -> PatientRepository:
    return PatientRepository(async_session)


def get_auth_service(
    staff_repo: StaffRepository = Depends(get_staff_repository),
    session_manager: SessionManager = Depends(get_session_manager),
) -> AuthService:
    return AuthService(
        staff_repo,
        session_manager,
        password_min_length=get_settings().password_min_length,
    )


def get_patient_service(
    patient_repo: PatientRepository = Depends(get_patient_repository),
    hospital_api: HospitalAPI = Depends(get_hospital_api),
) -> PatientService:
    return PatientService(patient_repo, hospital_api)
