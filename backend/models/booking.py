"""Booking model definitions."""

import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.schedule import Schedule
from backend.models.user import User


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    REJECTED = "REJECTED"


class Booking(Base):
    """A patient's request for a doctor's schedule slot."""
    __tablename__ = "bookings"
    __table_args__ = (
        # A schedule backs at most one confirmed booking.
        Index(
            "uq_bookings_schedule_confirmed",
            "schedule_id",
            unique=True,
            postgresql_where=text("status = 'CONFIRMED'"),
            sqlite_where=text("status = 'CONFIRMED'"),
        ),
    )

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    patient_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    appointment_date = Column(DateTime, nullable=False)
    note = Column(String)
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.PENDING)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    schedule = relationship(Schedule)
    doctor = relationship(User, foreign_keys=[doctor_id])
    patient = relationship(User, foreign_keys=[patient_id])
