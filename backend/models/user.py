"""User model definitions."""

import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Integer, String

from backend.database import Base


class UserRole(str, enum.Enum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    ADMIN = "ADMIN"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class DoctorReviewStatus(str, enum.Enum):
    """Outcome of the admin review of a doctor registration.

    PENDING_REVIEW moves to exactly one of APPROVED or REJECTED, never back.
    """

    PENDING_REVIEW = "PENDING_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class User(Base):
    """Represents an application user of any role."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    phone = Column(String)
    address = Column(String)
    gender = Column(Enum(Gender))
    date_of_birth = Column(Date)
    avatar_url = Column(String)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(UserRole), nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=False, nullable=False)
    review_status = Column(Enum(DoctorReviewStatus), nullable=True)  # doctors only
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    @property
    def is_approved(self) -> bool:
        return self.review_status == DoctorReviewStatus.APPROVED

    @property
    def is_rejected(self) -> bool:
        return self.review_status == DoctorReviewStatus.REJECTED
