from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_user
from backend.database import get_db
from backend.models.user import User
from backend.routes.common import database_unavailable
from backend.schemas.booking import BookingResponse, CreateBookingRequest
from backend.services.booking_service import BookingService

router = APIRouter(tags=['bookings'])


@router.post('', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: CreateBookingRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        booking = BookingService(db).create_booking(current_user.id, data.schedule_id, data.note)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
    return BookingResponse.model_validate(booking)
