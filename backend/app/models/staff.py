from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class Staff(Base):
    __tablename__ = "staff"
    __table_args__ = (
        UniqueConstraint("hospital_id", "username", name="uq_staff_hospital_username"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)  # bcrypt, never serialized
    hospital_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
