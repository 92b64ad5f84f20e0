from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.dependencies import get_auth_service
from app.schemas.auth import StaffCreateRequest, StaffLoginRequest
from app.schemas.response import success_response
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/staff/create", status_code=201)
async def create_staff(
    body: StaffCreateRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    staff = await auth_service.register(body.username, body.password, body.hospital_id)
    return JSONResponse(status_code=201, content=success_response(staff))


@router.post("/staff/login")
async def login(
    body: StaffLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange staff credentials for a session token."""
    result = await auth_service.login(body.username, body.password, body.hospital_id)
    return success_response(result)
