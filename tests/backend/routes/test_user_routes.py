import pytest
from fastapi import HTTPException
from sqlalchemy.exc import OperationalError

from backend.models.user import DoctorReviewStatus, UserRole
from backend.routes import user_routes
from backend.schemas.user import CreateUserRequest, ReviewDoctorRegistrationRequest, UpdateUserActiveRequest
from backend.services.email_templates import NotificationTemplate
from backend.services.user_service import UserService
from conftest import fake_hash, make_doctor, make_user


@pytest.fixture
def service(db, settings, notifier) -> UserService:
    return UserService(db, settings, notifier, password_hasher=fake_hash)


def test_register_user_returns_patient_view(service, notifier) -> None:
    response = user_routes.register_user(
        CreateUserRequest(
            full_name='Alice Nguyen',
            email='a@x.com',
            password='password123',
            role=UserRole.PATIENT,
            insurance_number='INS1',
            national_id='N1',
        ),
        service=service,
    )

    assert response.email == 'a@x.com'
    assert response.insurance_number == 'INS1'
    assert notifier.sent[0][1] is NotificationTemplate.ACTIVATION


def test_register_user_reports_database_outage() -> None:
    class BrokenService:
        def create_user(self, data):
            raise OperationalError('INSERT', {}, Exception('connection refused'))

    with pytest.raises(HTTPException) as exception_info:
        user_routes.register_user(data=None, service=BrokenService())

    assert exception_info.value.status_code == 503


def test_admin_review_route_approves_doctor(db, service) -> None:
    admin = make_user(db, 'admin@clinic.example.com', role=UserRole.ADMIN)
    doctor = make_doctor(db, 'doc@clinic.example.com', review_status=DoctorReviewStatus.PENDING_REVIEW)

    user_routes.review_doctor_registration(
        doctor.id,
        ReviewDoctorRegistrationRequest(is_approved=True),
        _admin=admin,
        service=service,
    )

    db.refresh(doctor)
    assert doctor.is_approved is True


def test_admin_active_route_deactivates_user(db, service) -> None:
    admin = make_user(db, 'admin@clinic.example.com', role=UserRole.ADMIN)
    patient = make_user(db, 'patient@example.com')

    user_routes.update_user_active_status(
        patient.id,
        UpdateUserActiveRequest(is_active=False),
        _admin=admin,
        service=service,
    )

    db.refresh(patient)
    assert patient.is_active is False


def test_list_pending_doctors_route_returns_page(db, service) -> None:
    admin = make_user(db, 'admin@clinic.example.com', role=UserRole.ADMIN)
    make_doctor(db, 'pending@clinic.example.com', review_status=DoctorReviewStatus.PENDING_REVIEW)

    page = user_routes.list_pending_doctors(page=0, size=10, _admin=admin, service=service)

    assert page.total == 1
    assert page.items[0].email == 'pending@clinic.example.com'


def test_get_my_profile_route_returns_current_user(db, service) -> None:
    patient = make_user(db, 'patient@example.com')

    response = user_routes.get_my_profile(current_user=patient, service=service)

    assert response.id == patient.id
    assert response.national_id == f'NID-{patient.id}'
