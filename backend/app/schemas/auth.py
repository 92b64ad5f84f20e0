from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class StaffCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    # Length is checked by AuthService against the configured minimum
    password: str
    hospital_id: int = Field(..., gt=0)


class StaffLoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    hospital_id: int = Field(..., gt=0)


class StaffResponse(BaseModel):
    """Staff account as seen by callers. There is no password field at all."""
    id: int
    username: str
    hospital_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StaffLoginResponse(BaseModel):
    token: str
    expires_at: int
