from app.models.patient import Patient
from app.models.staff import Staff

__all__ = ["Patient", "Staff"]
