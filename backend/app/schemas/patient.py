from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional


class PatientSearchRequest(BaseModel):
    # Either a 13-digit national ID or a passport number
    id: str = Field(..., min_length=1)


class PatientSearchResponse(BaseModel):
    """Canonical identity fields, shared by the registry payload and search results."""
    first_name_th: str = ""
    middle_name_th: str = ""
    last_name_th: str = ""
    first_name_en: str = ""
    middle_name_en: str = ""
    last_name_en: str = ""
    date_of_birth: Optional[date] = None
    patient_hn: str = ""
    national_id: str = ""
    passport_id: str = ""
    phone_number: str = ""
    email: str = ""
    gender: str = ""

    class Config:
        from_attributes = True

    @field_validator(
        "first_name_th", "middle_name_th", "last_name_th",
        "first_name_en", "middle_name_en", "last_name_en",
        "patient_hn", "phone_number", "email", "gender",
        mode="before",
    )
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("national_id", "passport_id", mode="before")
    @classmethod
    def normalize_identifier(cls, v):
        # Stored rows hold NULL where the registry sent a blank identifier
        return "" if v is None else str(v).strip()

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def strip_time_component(cls, v):
        # The registry sends full timestamps such as "1990-01-01T00:00:00Z"
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v
