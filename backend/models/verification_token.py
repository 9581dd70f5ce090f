"""Verification token model definitions."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import User


class VerificationToken(Base):
    """Single-use credential that activates an account."""
    __tablename__ = "verification_tokens"

    id = Column(Integer, primary_key=True)
    token = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    expiry_date = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)

    user = relationship(User)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now()) >= self.expiry_date
