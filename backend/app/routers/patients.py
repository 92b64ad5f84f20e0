from fastapi import APIRouter, Depends
from app.auth import StaffPrincipal, get_current_staff
from app.dependencies import get_patient_service
from app.schemas.patient import PatientSearchRequest
from app.schemas.response import success_response
from app.services.patient_service import PatientService

router = APIRouter()


@router.post("/search")
async def search_patient(
    body: PatientSearchRequest,
    current_staff: StaffPrincipal = Depends(get_current_staff),
    patient_service: PatientService = Depends(get_patient_service),
):
    """Look a patient up by national ID or passport number within the caller's hospital."""
    patient = await patient_service.search_patient(body.id, current_staff.hospital_id)
    return success_response(patient)
