"""Schedule model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User


class Schedule(Base):
    """A bookable time slot published by a doctor."""
    __tablename__ = "schedules"
    __table_args__ = (
        Index("idx_schedules_doctor_date", "doctor_id", "date"),
    )

    id = Column(Integer, primary_key=True)
    doctor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    date = Column(DateTime, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)

    doctor = relationship(User)
