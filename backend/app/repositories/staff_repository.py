from typing import Optional
from sqlalchemy import select
from app.exceptions import DuplicateAccountError
from app.models.staff import Staff
from app.repositories.base import BaseRepository


class StaffRepository(BaseRepository):
    duplicate_error = DuplicateAccountError

    async def find_by_username(self, hospital_id: int, username: str) -> Optional[Staff]:
        async with self.session() as session:
            result = await session.execute(
                select(Staff).where(Staff.hospital_id == hospital_id, Staff.username == username)
            )
            return result.scalar_one_or_none()

    async def create(self, staff: Staff) -> Staff:
        async with self.transaction() as session:
            session.add(staff)
            await session.flush()
            await session.refresh(staff)
        return staff
