import logging
from datetime import datetime

from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.password import hash_password, verify_password
from backend.core.config import AppSettings
from backend.core.errors import AppException, ErrorCode
from backend.database import unit_of_work
from backend.models.user import User, UserRole
from backend.models.verification_token import VerificationToken

logger = logging.getLogger(__name__)

ADMIN_FULL_NAME = "Administrator"


class AuthService:
    def __init__(self, db: Session, settings: AppSettings):
        self.db = db
        self.settings = settings

    def authenticate(self, email: str, password: str) -> str:
        user = self.db.query(User).filter(User.email == email.strip().lower()).first()
        if user is None or not verify_password(password, user.hashed_password):
            raise AppException(ErrorCode.INVALID_CREDENTIALS)

        if not user.is_verified or not user.is_active:
            raise AppException(ErrorCode.ACCOUNT_NOT_ACTIVATED)

        return jwt_handler.create_access_token(subject=user.email, role=user.role.value)

    def activate_account(self, token: str) -> User:
        """Consume a verification token and activate its owner."""
        with unit_of_work(self.db):
            verification_token = (
                self.db.query(VerificationToken)
                .filter(VerificationToken.token == token)
                .with_for_update()
                .first()
            )
            if verification_token is None or verification_token.used_at is not None:
                raise AppException(ErrorCode.TOKEN_INVALID)

            now = datetime.now()
            if verification_token.is_expired(now):
                raise AppException(ErrorCode.TOKEN_EXPIRED)

            user = verification_token.user
            verification_token.used_at = now
            user.is_verified = True
            user.is_active = True

        logger.info("Activated account for user %s", user.id)
        return user

    def ensure_admin_account(self) -> User | None:
        if not self.settings.admin_email or not self.settings.admin_password:
            return None

        admin = self.db.query(User).filter(User.email == self.settings.admin_email).first()
        if admin is not None:
            return admin

        with unit_of_work(self.db):
            admin = User(
                full_name=ADMIN_FULL_NAME,
                email=self.settings.admin_email,
                hashed_password=hash_password(self.settings.admin_password),
                role=UserRole.ADMIN,
                is_verified=True,
                is_active=True,
            )
            self.db.add(admin)

        logger.info("Created bootstrap admin account %s", admin.email)
        return admin
