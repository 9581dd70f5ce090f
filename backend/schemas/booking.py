from datetime import datetime

from pydantic import BaseModel, field_validator

from backend.models.booking import BookingStatus

MAX_BOOKING_NOTE_LENGTH = 600


class CreateBookingRequest(BaseModel):
    schedule_id: int
    note: str | None = None

    @field_validator('note')
    @classmethod
    def validate_note(cls, value: str | None) -> str | None:
        if value is None:
            return None

        normalized = value.strip()
        if not normalized:
            return None

        if len(normalized) > MAX_BOOKING_NOTE_LENGTH:
            raise ValueError(f'Note must be {MAX_BOOKING_NOTE_LENGTH} characters or fewer.')

        return normalized


class BookingResponse(BaseModel):
    id: int
    schedule_id: int
    doctor_id: int
    patient_id: int
    appointment_date: datetime
    note: str | None = None
    status: BookingStatus
    created_at: datetime

    class Config:
        from_attributes = True
