import asyncio
import logging
from passlib.context import CryptContext
from app.exceptions import InvalidCredentialsError, InvalidInputError
from app.models.staff import Staff
from app.repositories.base import CredentialStore
from app.schemas.auth import StaffLoginResponse, StaffResponse
from app.services.session_manager import SessionClaims, SessionManager

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

DEFAULT_PASSWORD_MIN_LENGTH = 8


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class AuthService:
    """Staff registration and login for a single hospital scope."""

    def __init__(
        self,
        staff_repo: CredentialStore,
        session_manager: SessionManager,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self.staff_repo = staff_repo
        self.session_manager = session_manager
        self.password_min_length = password_min_length

    async def register(self, username: str, password: str, hospital_id: int) -> StaffResponse:
        username = (username or "").strip()
        if not username:
            raise InvalidInputError("username is required")
        if len(password or "") < self.password_min_length:
            raise InvalidInputError(f"password must be at least {self.password_min_length} characters")
        if hospital_id is None or hospital_id <= 0:
            raise InvalidInputError("hospital_id must be a positive integer")

        # bcrypt is deliberately slow, keep it off the event loop
        password_hash = await asyncio.to_thread(hash_password, password)

        staff = await self.staff_repo.create(
            Staff(username=username, password_hash=password_hash, hospital_id=hospital_id)
        )
        logger.info("Registered staff %s for hospital %s", staff.id, hospital_id)
        return StaffResponse.model_validate(staff)

    async def login(self, username: str, password: str, hospital_id: int) -> StaffLoginResponse:
        staff = await self.staff_repo.find_by_username(hospital_id, (username or "").strip())

        if staff is None:
            # Burn the same bcrypt cost as a real check
            await asyncio.to_thread(pwd_context.dummy_verify)
            logger.info("Login rejected for hospital %s", hospital_id)
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(verify_password, password or "", staff.password_hash):
            logger.info("Login rejected for hospital %s", hospital_id)
            raise InvalidCredentialsError()

        token, expires_at = self.session_manager.issue(staff.id, staff.hospital_id)
        return StaffLoginResponse(token=token, expires_at=expires_at)

    def validate_token(self, token: str) -> SessionClaims:
        return self.session_manager.verify(token)
