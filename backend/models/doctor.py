"""Doctor profile model definitions."""

from sqlalchemy import Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User


class Doctor(Base):
    """Doctor-specific profile, owned one-to-one by a user."""
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    department = Column(String, nullable=False)
    specialization = Column(String, nullable=False)
    bio = Column(Text)
    rating_avg = Column(Float, default=0.0, nullable=False)

    user = relationship(User)
