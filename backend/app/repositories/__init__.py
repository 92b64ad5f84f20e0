from app.repositories.base import CredentialStore, PatientStore
from app.repositories.patient_repository import PatientRepository
from app.repositories.staff_repository import StaffRepository

__all__ = ["CredentialStore", "PatientStore", "PatientRepository", "StaffRepository"]
