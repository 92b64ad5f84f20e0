from pydantic import BaseModel
from typing import Any, Optional


class APIError(BaseModel):
    code: int
    message: str
    details: Optional[Any] = None


def success_response(data: Any) -> dict:
    """Wrap a payload as ``{"success": true, "data": ...}``."""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")
    return {"success": True, "data": data}


def error_response(code: int, message: str, details: Any = None) -> dict:
    error = APIError(code=code, message=message, details=details)
    return {"success": False, "error": error.model_dump(mode="json", exclude_none=True)}
