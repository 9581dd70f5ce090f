import logging
from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import AppException, ErrorCode
from backend.database import unit_of_work
from backend.models.booking import Booking, BookingStatus
from backend.models.schedule import Schedule
from backend.models.user import User, UserRole

logger = logging.getLogger(__name__)


class BookingService:
    """Turns a patient's request for a schedule slot into a pending booking.

    The slot is claimed twice over: the schedule row is locked for the rest
    of the transaction, and the availability flag is flipped with a
    conditional UPDATE so that only one writer can ever see it go from true
    to false. Backends without row locks (SQLite) still serialize on the
    conditional UPDATE.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_booking(self, patient_id: int, schedule_id: int, note: str | None = None) -> Booking:
        try:
            with unit_of_work(self.db):
                booking = self._create_booking(patient_id, schedule_id, note)
        except IntegrityError as exc:
            raise AppException(ErrorCode.SCHEDULE_ALREADY_BOOKED) from exc

        logger.info("Booking %s created for schedule %s by patient %s", booking.id, schedule_id, patient_id)
        return booking

    def _create_booking(self, patient_id: int, schedule_id: int, note: str | None) -> Booking:
        schedule = (
            self.db.query(Schedule)
            .filter(Schedule.id == schedule_id)
            .with_for_update()
            .first()
        )
        if schedule is None:
            raise AppException(ErrorCode.SCHEDULE_NOT_FOUND)

        if not schedule.is_available:
            raise AppException(ErrorCode.SCHEDULE_NOT_AVAILABLE)

        already_booked = self.db.query(Booking.id).filter(
            Booking.schedule_id == schedule.id,
            Booking.status == BookingStatus.CONFIRMED,
        ).first()
        if already_booked is not None:
            raise AppException(ErrorCode.SCHEDULE_ALREADY_BOOKED)

        patient = self.db.get(User, patient_id)
        if patient is None:
            raise AppException(ErrorCode.USER_NOT_EXIST)

        if patient.role != UserRole.PATIENT:
            raise AppException(ErrorCode.ROLE_NOT_ALLOWED)

        claimed = self.db.execute(
            update(Schedule)
            .where(Schedule.id == schedule.id, Schedule.is_available.is_(True))
            .values(is_available=False)
        )
        if claimed.rowcount != 1:
            raise AppException(ErrorCode.SCHEDULE_NOT_AVAILABLE)

        booking = Booking(
            schedule_id=schedule.id,
            doctor_id=schedule.doctor_id,
            patient_id=patient.id,
            appointment_date=schedule.date,
            note=note,
            status=BookingStatus.PENDING,
            created_at=datetime.now(),
        )
        self.db.add(booking)
        self.db.flush()
        return booking
