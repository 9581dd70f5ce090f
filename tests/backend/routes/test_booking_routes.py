import asyncio
import json
from datetime import datetime

import pytest
from pydantic import ValidationError

from backend.core.errors import AppException, ErrorCode
from backend.main import handle_app_exception
from backend.models.booking import BookingStatus
from backend.routes.booking_routes import create_booking
from backend.schemas.booking import CreateBookingRequest
from conftest import make_doctor, make_schedule, make_user


def test_create_booking_request_normalizes_blank_note() -> None:
    request = CreateBookingRequest(schedule_id=1, note='   ')

    assert request.note is None


def test_create_booking_request_rejects_long_note() -> None:
    with pytest.raises(ValidationError):
        CreateBookingRequest(schedule_id=1, note='x' * 601)


def test_create_booking_route_returns_pending_booking(db) -> None:
    doctor = make_doctor(db, 'doc@clinic.example.com')
    patient = make_user(db, 'patient@example.com')
    schedule = make_schedule(db, doctor, when=datetime(2026, 11, 3, 14, 0))

    response = create_booking(
        CreateBookingRequest(schedule_id=schedule.id, note=' checkup '),
        current_user=patient,
        db=db,
    )

    assert response.status == BookingStatus.PENDING
    assert response.note == 'checkup'
    assert response.appointment_date == datetime(2026, 11, 3, 14, 0)
    assert response.patient_id == patient.id


def test_create_booking_route_surfaces_workflow_errors(db) -> None:
    patient = make_user(db, 'patient@example.com')

    with pytest.raises(AppException) as exception_info:
        create_booking(CreateBookingRequest(schedule_id=999), current_user=patient, db=db)

    response = asyncio.run(handle_app_exception(None, exception_info.value))

    assert response.status_code == 404
    assert json.loads(response.body) == {
        'code': ErrorCode.SCHEDULE_NOT_FOUND.code,
        'error': 'SCHEDULE_NOT_FOUND',
        'message': 'Schedule not found.',
    }


@pytest.mark.parametrize(
    ('error_code', 'status_code'),
    [
        (ErrorCode.SCHEDULE_NOT_AVAILABLE, 409),
        (ErrorCode.PATIENT_INFO_REQUIRED, 400),
        (ErrorCode.ROLE_NOT_ALLOWED, 403),
        (ErrorCode.INVALID_CREDENTIALS, 401),
        (ErrorCode.USER_NOT_EXIST, 404),
    ],
)
def test_app_exception_handler_maps_error_kinds(error_code: ErrorCode, status_code: int) -> None:
    response = asyncio.run(handle_app_exception(None, AppException(error_code)))

    assert response.status_code == status_code
    assert json.loads(response.body)['code'] == error_code.code


def test_create_booking_route_reports_missing_schedule_before_role(db) -> None:
    doctor = make_doctor(db, 'doc@clinic.example.com')

    with pytest.raises(AppException) as exception_info:
        create_booking(CreateBookingRequest(schedule_id=999), current_user=doctor, db=db)

    assert exception_info.value.error_code is ErrorCode.SCHEDULE_NOT_FOUND


def test_create_booking_route_rejects_non_patient_for_existing_schedule(db) -> None:
    doctor = make_doctor(db, 'doc@clinic.example.com')
    schedule = make_schedule(db, doctor)

    with pytest.raises(AppException) as exception_info:
        create_booking(CreateBookingRequest(schedule_id=schedule.id), current_user=doctor, db=db)

    assert exception_info.value.error_code is ErrorCode.ROLE_NOT_ALLOWED
