"""
Stateless session tokens: HS256 JWTs binding a staff member to a hospital.

Nothing is stored server side. Any holder of the shared secret can verify a
token, and a token stays valid until its ``exp`` claim passes.
"""

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable
from jose import jwt, JWTError
from app.config import Settings
from app.exceptions import InvalidSignatureError, TokenExpiredError

ALGORITHM = "HS256"


@dataclass(frozen=True)
class SessionClaims:
    staff_id: int
    hospital_id: int
    issued_at: int
    expires_at: int


class SessionManager:
    def __init__(
        self,
        secret: str,
        lifetime: timedelta,
        issuer: str = "hms-api",
        clock: Callable[[], float] = time.time,
    ):
        self.secret = secret
        self.lifetime = lifetime
        self.issuer = issuer
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionManager":
        return cls(
            secret=settings.jwt_secret_key,
            lifetime=timedelta(hours=settings.jwt_expire_hours),
            issuer=settings.jwt_issuer,
        )

    def issue(self, staff_id: int, hospital_id: int) -> tuple[str, int]:
        """Mint a token. Returns the token and its expiry in unix seconds."""
        now = int(self._clock())
        expires_at = now + int(self.lifetime.total_seconds())
        payload = {
            "user_id": staff_id,
            "hospital_id": hospital_id,
            "sub": str(staff_id),
            "iss": self.issuer,
            "iat": now,
            "nbf": now,
            "exp": expires_at,
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM), expires_at

    def verify(self, token: str) -> SessionClaims:
        """
        Check signature, issuer and lifetime of ``token``.

        Time claims are checked against the manager's clock rather than the
        wall clock, so tokens minted by this manager verify under the same time.
        """
        # algorithms is pinned so a token cannot choose its own verification scheme
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                issuer=self.issuer,
                options={"verify_exp": False, "verify_nbf": False},
            )
        except JWTError as e:
            raise InvalidSignatureError() from e

        try:
            claims = SessionClaims(
                staff_id=int(payload["user_id"]),
                hospital_id=int(payload["hospital_id"]),
                issued_at=int(payload["iat"]),
                expires_at=int(payload["exp"]),
            )
            not_before = int(payload.get("nbf", claims.issued_at))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSignatureError("malformed token claims") from e

        now = int(self._clock())
        if claims.expires_at < now:
            raise TokenExpiredError()
        if not_before > now:
            raise InvalidSignatureError("token not yet valid")
        return claims
