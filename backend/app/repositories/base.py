import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from app.exceptions import DuplicateResourceError, InternalFailureError
from app.models.patient import Patient
from app.models.staff import Staff

logger = logging.getLogger(__name__)


class PatientStore(Protocol):
    """Capability the identity resolution flow depends on."""

    async def find_by_national_id(self, hospital_id: int, national_id: str) -> Optional[Patient]:
        ...

    async def find_by_passport_id(self, hospital_id: int, passport_id: str) -> Optional[Patient]:
        ...

    async def create(self, patient: Patient) -> Patient:
        ...


class CredentialStore(Protocol):
    """Capability the authentication flow depends on."""

    async def find_by_username(self, hospital_id: int, username: str) -> Optional[Staff]:
        ...

    async def create(self, staff: Staff) -> Staff:
        ...


class BaseRepository:
    """
    Session-per-operation base for the SQLAlchemy stores.

    A connection is held only while one query or one transaction runs and is
    returned to the pool on every exit path.
    """

    duplicate_error = DuplicateResourceError

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read scope. The implicit transaction is rolled back on close."""
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Database read failed: %s", e)
            raise InternalFailureError() from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Write scope: commit when the body returns, roll back when it raises."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield session
        except IntegrityError as e:
            raise self.duplicate_error() from e
        except SQLAlchemyError as e:
            logger.error("Database write failed: %s", e)
            raise InternalFailureError() from e
