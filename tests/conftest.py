import os
from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')

from backend.core.config import AppSettings  # noqa: E402
from backend.database import Base  # noqa: E402
from backend.models.booking import Booking  # noqa: E402, F401
from backend.models.doctor import Doctor  # noqa: E402
from backend.models.patient import Patient  # noqa: E402
from backend.models.schedule import Schedule  # noqa: E402
from backend.models.user import DoctorReviewStatus, User, UserRole  # noqa: E402
from backend.models.verification_token import VerificationToken  # noqa: E402, F401


class RecordingNotifier:
    def __init__(self, deliver: bool = True):
        self.deliver = deliver
        self.sent = []

    def send(self, address, template, params) -> bool:
        self.sent.append((address, template, params))
        return self.deliver


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url='https://clinic.example.com',
        activation_path='/auth/activate',
        verification_token_ttl_minutes=60,
        mail_sender='CareSync <no-reply@clinic.example.com>',
        admin_email='admin@clinic.example.com',
        admin_password='admin-password',
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def fake_hash(password: str) -> str:
    return f'hashed::{password}'


def make_user(db, email: str, role: UserRole = UserRole.PATIENT, with_profile: bool = True, **fields) -> User:
    values = {
        'full_name': email.split('@')[0].title(),
        'email': email,
        'hashed_password': fake_hash('password123'),
        'role': role,
        'is_verified': True,
        'is_active': True,
    }
    values.update(fields)
    user = User(**values)
    db.add(user)
    db.flush()

    if role == UserRole.PATIENT and with_profile:
        db.add(Patient(user_id=user.id, insurance_number='INS-' + str(user.id), national_id='NID-' + str(user.id)))
    db.commit()
    return user


def make_doctor(db, email: str, review_status=DoctorReviewStatus.APPROVED, with_profile: bool = True, **fields) -> User:
    doctor_user = make_user(db, email, role=UserRole.DOCTOR, with_profile=False, review_status=review_status, **fields)
    if with_profile:
        db.add(Doctor(user_id=doctor_user.id, department='Cardiology', specialization='Cardio', rating_avg=0.0))
        db.commit()
    return doctor_user


def make_schedule(db, doctor: User, when: datetime | None = None, is_available: bool = True) -> Schedule:
    schedule = Schedule(
        doctor_id=doctor.id,
        date=when or datetime(2026, 11, 2, 9, 30),
        is_available=is_available,
    )
    db.add(schedule)
    db.commit()
    return schedule
