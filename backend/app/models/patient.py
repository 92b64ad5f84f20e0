from sqlalchemy import CheckConstraint, Column, Integer, String, Date, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class Patient(Base):
    __tablename__ = "patients"
    # NULL identifiers never collide, so a patient may carry just one of the two
    __table_args__ = (
        UniqueConstraint("hospital_id", "national_id", name="uq_patients_hospital_national_id"),
        UniqueConstraint("hospital_id", "passport_id", name="uq_patients_hospital_passport_id"),
        CheckConstraint("national_id IS NOT NULL OR passport_id IS NOT NULL", name="ck_patients_has_identifier"),
    )

    id = Column(Integer, primary_key=True, index=True)
    national_id = Column(String(13))
    passport_id = Column(String(20))
    first_name_th = Column(String(100))
    middle_name_th = Column(String(100))
    last_name_th = Column(String(100))
    first_name_en = Column(String(100))
    middle_name_en = Column(String(100))
    last_name_en = Column(String(100))
    date_of_birth = Column(Date)
    patient_hn = Column(String(20))
    phone_number = Column(String(20))
    email = Column(String(200))
    gender = Column(String(10))
    hospital_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
