"""
Bearer-token authentication for protected routes.

``get_current_staff`` is the FastAPI dependency. Unlike an optional-auth
scheme it always rejects: a missing header, a header that is not exactly
``Bearer <token>``, or a token that fails verification all end in 401 before
the route body runs. The hospital scope of a request comes only from the
verified token, never from the request body.
"""

from dataclasses import dataclass
from fastapi import Depends, Request
from app.dependencies import get_session_manager
from app.exceptions import AppError, UnauthorizedError
from app.services.session_manager import SessionManager


@dataclass(frozen=True)
class StaffPrincipal:
    """Resolved identity attached to each authenticated request."""
    staff_id: int
    hospital_id: int


def extract_bearer_token(auth_header: str) -> str:
    if not auth_header:
        raise UnauthorizedError("authorization header is required")
    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise UnauthorizedError("invalid authorization header format")
    return parts[1]


async def get_current_staff(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager),
) -> StaffPrincipal:
    token = extract_bearer_token(request.headers.get("Authorization", ""))
    try:
        claims = session_manager.verify(token)
    except AppError as e:
        raise UnauthorizedError("invalid or expired token") from e
    return StaffPrincipal(staff_id=claims.staff_id, hospital_id=claims.hospital_id)
