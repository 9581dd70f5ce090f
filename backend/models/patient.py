"""Patient profile model definitions."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User


class Patient(Base):
    """Patient-specific profile, owned one-to-one by a user."""
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    insurance_number = Column(String, nullable=False)
    national_id = Column(String, nullable=False)
    medical_history = Column(Text)

    user = relationship(User)
