"""Pytest configuration and fixtures."""

import asyncio
import itertools
from datetime import timedelta
from typing import Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.database import Base
from app.exceptions import DuplicateAccountError, DuplicateResourceError
from app.models import Patient, Staff
from app.schemas.patient import PatientSearchResponse
from app.services.hospital_api_service import MOCK_PATIENT, MockHospitalAPIClient
from app.services.session_manager import SessionManager

TEST_SECRET = "test-secret"


class InMemoryStaffStore:
    def __init__(self):
        self.rows: dict[tuple[int, str], Staff] = {}
        self._ids = itertools.count(1)

    async def find_by_username(self, hospital_id: int, username: str) -> Optional[Staff]:
        return self.rows.get((hospital_id, username))

    async def create(self, staff: Staff) -> Staff:
        key = (staff.hospital_id, staff.username)
        if key in self.rows:
            raise DuplicateAccountError()
        staff.id = next(self._ids)
        self.rows[key] = staff
        return staff


class InMemoryPatientStore:
    def __init__(self):
        self.rows: list[Patient] = []
        self.create_calls = 0
        self.lookups: list[tuple[str, int, str]] = []
        self._ids = itertools.count(1)

    async def find_by_national_id(self, hospital_id: int, national_id: str) -> Optional[Patient]:
        self.lookups.append(("national_id", hospital_id, national_id))
        return next(
            (p for p in self.rows if p.hospital_id == hospital_id and p.national_id == national_id),
            None,
        )

    async def find_by_passport_id(self, hospital_id: int, passport_id: str) -> Optional[Patient]:
        self.lookups.append(("passport_id", hospital_id, passport_id))
        return next(
            (p for p in self.rows if p.hospital_id == hospital_id and p.passport_id == passport_id),
            None,
        )

    async def create(self, patient: Patient) -> Patient:
        self.create_calls += 1
        for row in self.rows:
            if row.hospital_id != patient.hospital_id:
                continue
            if patient.national_id and row.national_id == patient.national_id:
                raise DuplicateResourceError("patient already exists")
            if patient.passport_id and row.passport_id == patient.passport_id:
                raise DuplicateResourceError("patient already exists")
        patient.id = next(self._ids)
        self.rows.append(patient)
        return patient


class FailingPatientStore(InMemoryPatientStore):
    """Lookups work, every insert blows up."""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    async def create(self, patient: Patient) -> Patient:
        self.create_calls += 1
        raise self.error


class CountingHospitalAPI:
    """Wraps the fixture registry and records every identifier it was asked for."""

    def __init__(self, delegate=None):
        self.delegate = delegate or MockHospitalAPIClient()
        self.calls: list[str] = []

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        self.calls.append(identifier)
        return await self.delegate.search_patient(identifier)


class BarrierHospitalAPI(CountingHospitalAPI):
    """Holds every caller until ``parties`` lookups are in flight at once."""

    def __init__(self, parties: int):
        super().__init__()
        self.parties = parties
        self._arrived = asyncio.Event()

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        self.calls.append(identifier)
        if len(self.calls) >= self.parties:
            self._arrived.set()
        await asyncio.wait_for(self._arrived.wait(), timeout=5)
        return MOCK_PATIENT.model_copy()


class StaticHospitalAPI:
    """Answers every lookup with the same identity."""

    def __init__(self, identity: PatientSearchResponse):
        self.identity = identity
        self.calls: list[str] = []

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        self.calls.append(identifier)
        return self.identity.model_copy()


class RaisingHospitalAPI:
    def __init__(self, error: Exception):
        self.error = error
        self.calls: list[str] = []

    async def search_patient(self, identifier: str) -> PatientSearchResponse:
        self.calls.append(identifier)
        raise self.error


@pytest.fixture
def session_manager():
    return SessionManager(secret=TEST_SECRET, lifetime=timedelta(hours=24), issuer="hms-api")


@pytest.fixture
def staff_store():
    return InMemoryStaffStore()


@pytest.fixture
def patient_store():
    return InMemoryPatientStore()


@pytest.fixture
def hospital_api():
    return CountingHospitalAPI()


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """SQLite-backed session factory with the full schema created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'hms.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
