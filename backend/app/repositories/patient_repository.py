from typing import Optional
from sqlalchemy import select
from app.models.patient import Patient
from app.repositories.base import BaseRepository


class PatientRepository(BaseRepository):
    """Patient identities, always scoped to one hospital."""

    async def find_by_national_id(self, hospital_id: int, national_id: str) -> Optional[Patient]:
        async with self.session() as session:
            result = await session.execute(
                select(Patient).where(Patient.hospital_id == hospital_id, Patient.national_id == national_id)
            )
            return result.scalar_one_or_none()

    async def find_by_passport_id(self, hospital_id: int, passport_id: str) -> Optional[Patient]:
        async with self.session() as session:
            result = await session.execute(
                select(Patient).where(Patient.hospital_id == hospital_id, Patient.passport_id == passport_id)
            )
            return result.scalar_one_or_none()

    async def create(self, patient: Patient) -> Patient:
        # Single INSERT per transaction; a lost uniqueness race leaves nothing behind
        async with self.transaction() as session:
            session.add(patient)
            await session.flush()
            await session.refresh(patient)
        return patient
