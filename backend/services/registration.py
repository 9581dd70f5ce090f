"""Role-specific completion of a new account.

``UserService.create_user`` picks a strategy by role. A role with no
strategy cannot self-register.
"""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from backend.core.config import AppSettings
from backend.core.errors import AppException, ErrorCode
from backend.models.doctor import Doctor
from backend.models.patient import Patient
from backend.models.user import DoctorReviewStatus, User, UserRole
from backend.schemas.user import CreateUserRequest
from backend.services.email_templates import NotificationTemplate
from backend.services.notification_service import Notification
from backend.services.verification import build_activation_link, issue_verification_token


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


@dataclass
class RegistrationResult:
    profile: Patient | Doctor
    notification: Notification


class RegistrationStrategy:
    role: UserRole

    def validate(self, request: CreateUserRequest) -> None:
        raise NotImplementedError

    def complete(self, db: Session, user: User, request: CreateUserRequest) -> RegistrationResult:
        raise NotImplementedError


class PatientRegistration(RegistrationStrategy):
    role = UserRole.PATIENT

    def __init__(self, settings: AppSettings):
        self.settings = settings

    def validate(self, request: CreateUserRequest) -> None:
        if not _has_text(request.insurance_number) or not _has_text(request.national_id):
            raise AppException(ErrorCode.PATIENT_INFO_REQUIRED)

    def complete(self, db: Session, user: User, request: CreateUserRequest) -> RegistrationResult:
        patient = Patient(
            user=user,
            insurance_number=request.insurance_number.strip(),
            national_id=request.national_id.strip(),
            medical_history=request.medical_history,
        )
        db.add(patient)

        verification_token = issue_verification_token(db, user, self.settings)
        activation_link = build_activation_link(self.settings, verification_token.token)

        return RegistrationResult(
            profile=patient,
            notification=Notification(
                address=user.email,
                template=NotificationTemplate.ACTIVATION,
                params={"full_name": user.full_name, "activation_link": activation_link},
            ),
        )


class DoctorRegistration(RegistrationStrategy):
    role = UserRole.DOCTOR

    def validate(self, request: CreateUserRequest) -> None:
        if not _has_text(request.department) or not _has_text(request.specialization):
            raise AppException(ErrorCode.DOCTOR_INFO_REQUIRED)

    def complete(self, db: Session, user: User, request: CreateUserRequest) -> RegistrationResult:
        # Doctors wait for admin review before they receive an activation link.
        user.review_status = DoctorReviewStatus.PENDING_REVIEW
        doctor = Doctor(
            user=user,
            department=request.department.strip(),
            specialization=request.specialization.strip(),
            bio=request.bio,
            rating_avg=0.0,
        )
        db.add(doctor)

        return RegistrationResult(
            profile=doctor,
            notification=Notification(
                address=user.email,
                template=NotificationTemplate.PENDING_APPROVAL,
                params={"full_name": user.full_name},
            ),
        )


def default_strategies(settings: AppSettings) -> dict[UserRole, RegistrationStrategy]:
    strategies = [PatientRegistration(settings), DoctorRegistration()]
    return {strategy.role: strategy for strategy in strategies}
