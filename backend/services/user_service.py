import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.auth.password import hash_password
from backend.core.config import AppSettings
from backend.core.errors import AppException, ErrorCode
from backend.database import DEFAULT_PAGE_SIZE, paginate, unit_of_work
from backend.models.doctor import Doctor
from backend.models.patient import Patient
from backend.models.user import DoctorReviewStatus, User, UserRole
from backend.models.verification_token import VerificationToken
from backend.schemas.user import CreateUserRequest, PageResponse, UserResponse, to_user_response
from backend.services.email_templates import NotificationTemplate
from backend.services.notification_service import Notification, NotificationGateway, dispatch
from backend.services.registration import RegistrationStrategy, default_strategies
from backend.services.verification import build_activation_link, issue_verification_token

logger = logging.getLogger(__name__)

LISTED_ROLES = (UserRole.DOCTOR, UserRole.PATIENT)


class UserService:
    """Registration, doctor review and account status workflows."""

    def __init__(
        self,
        db: Session,
        settings: AppSettings,
        notifier: NotificationGateway,
        strategies: dict[UserRole, RegistrationStrategy] | None = None,
        password_hasher: Callable[[str], str] = hash_password,
    ):
        self.db = db
        self.settings = settings
        self.notifier = notifier
        self.strategies = strategies if strategies is not None else default_strategies(settings)
        self.password_hasher = password_hasher

    def create_user(self, request: CreateUserRequest) -> UserResponse:
        if self.db.query(User.id).filter(User.email == request.email).first() is not None:
            raise AppException(ErrorCode.USER_EXISTED)

        strategy = self.strategies.get(request.role)
        if strategy is None:
            raise AppException(ErrorCode.ROLE_NOT_ALLOWED)
        strategy.validate(request)

        try:
            with unit_of_work(self.db):
                user = User(
                    full_name=request.full_name,
                    email=request.email,
                    phone=request.phone,
                    address=request.address,
                    gender=request.gender,
                    date_of_birth=request.date_of_birth,
                    avatar_url=request.avatar_url,
                    hashed_password=self.password_hasher(request.password),
                    role=request.role,
                    is_verified=False,
                    is_active=False,
                )
                self.db.add(user)
                self.db.flush()
                result = strategy.complete(self.db, user, request)
        except IntegrityError as exc:
            raise AppException(ErrorCode.USER_EXISTED) from exc

        logger.info("Registered %s user %s", user.role.value, user.id)
        dispatch(self.notifier, result.notification)
        return to_user_response(user, result.profile)

    def review_doctor_registration(
        self,
        user_id: int,
        is_approved: bool,
        reject_reason: str | None = None,
    ) -> None:
        with unit_of_work(self.db):
            user = self.db.get(User, user_id)
            if user is None:
                raise AppException(ErrorCode.USER_NOT_EXIST)

            if user.role != UserRole.DOCTOR:
                raise AppException(ErrorCode.ROLE_NOT_ALLOWED)

            if user.is_approved:
                raise AppException(ErrorCode.DOCTOR_ALREADY_APPROVED)

            if user.is_rejected or user.deleted_at is not None:
                raise AppException(ErrorCode.DOCTOR_ALREADY_REJECTED)

            if is_approved:
                user.review_status = DoctorReviewStatus.APPROVED
                verification_token = issue_verification_token(self.db, user, self.settings)
                notification = Notification(
                    address=user.email,
                    template=NotificationTemplate.ACTIVATION,
                    params={
                        "full_name": user.full_name,
                        "activation_link": build_activation_link(self.settings, verification_token.token),
                    },
                )
            else:
                user.review_status = DoctorReviewStatus.REJECTED
                user.deleted_at = datetime.now()
                notification = Notification(
                    address=user.email,
                    template=NotificationTemplate.DOCTOR_REJECTED,
                    params={"full_name": user.full_name, "reason": reject_reason},
                )

            self.db.add(user)

        logger.info("Doctor %s registration %s", user_id, user.review_status.value.lower())
        dispatch(self.notifier, notification)

    def update_user_active_status(self, user_id: int, is_active: bool) -> None:
        with unit_of_work(self.db):
            user = self.db.get(User, user_id)
            if user is None:
                raise AppException(ErrorCode.USER_NOT_EXIST)

            if user.is_active == is_active:
                raise AppException(
                    ErrorCode.ACCOUNT_ALREADY_ACTIVE if user.is_active else ErrorCode.ACCOUNT_ALREADY_DEACTIVATE
                )

            user.is_active = is_active
            if not is_active:
                # Outstanding activation links must not undo a deactivation.
                self.db.query(VerificationToken).filter(
                    VerificationToken.user_id == user.id,
                    VerificationToken.used_at.is_(None),
                ).update({VerificationToken.used_at: datetime.now()}, synchronize_session=False)
            self.db.add(user)

        template = NotificationTemplate.ADMIN_ACTIVATION if is_active else NotificationTemplate.ACCOUNT_DEACTIVATED
        logger.info("User %s active status set to %s", user_id, is_active)
        dispatch(self.notifier, Notification(user.email, template, {"full_name": user.full_name}))

    def get_user_by_user_id(self, user_id: int) -> UserResponse:
        user = self.db.get(User, user_id)
        if user is None:
            raise AppException(ErrorCode.USER_NOT_FOUND_FROM_TOKEN)
        return self._with_profile(user)

    def get_all_users(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> PageResponse:
        query = self.db.query(User).filter(User.role.in_(LISTED_ROLES)).order_by(User.id.asc())
        users, total = paginate(query, page, size)
        return PageResponse(
            items=[self._with_profile(user) for user in users],
            page=page,
            size=size,
            total=total,
        )

    def get_pending_doctors(self, page: int = 0, size: int = DEFAULT_PAGE_SIZE) -> PageResponse:
        query = (
            self.db.query(Doctor)
            .join(Doctor.user)
            .filter(
                User.review_status == DoctorReviewStatus.PENDING_REVIEW,
                User.deleted_at.is_(None),
            )
            .order_by(User.created_at.asc(), User.id.asc())
        )
        doctors, total = paginate(query, page, size)
        return PageResponse(
            items=[to_user_response(doctor.user, doctor) for doctor in doctors],
            page=page,
            size=size,
            total=total,
        )

    def _with_profile(self, user: User) -> UserResponse:
        if user.role == UserRole.DOCTOR:
            profile = self.db.query(Doctor).filter(Doctor.user_id == user.id).first()
        elif user.role == UserRole.PATIENT:
            profile = self.db.query(Patient).filter(Patient.user_id == user.id).first()
        else:
            raise AppException(ErrorCode.UNAUTHORIZED)

        if profile is None:
            raise AppException(ErrorCode.USER_NOT_FOUND_FROM_TOKEN)
        return to_user_response(user, profile)
