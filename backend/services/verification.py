import uuid
from datetime import datetime, timedelta
from urllib.parse import urlencode, urlparse, urlunparse

from sqlalchemy.orm import Session

from backend.core.config import AppSettings
from backend.models.user import User
from backend.models.verification_token import VerificationToken


def build_activation_link(settings: AppSettings, token: str) -> str:
    parsed = urlparse(settings.base_url)
    path = parsed.path.rstrip("/") + settings.activation_path
    return urlunparse(parsed._replace(path=path, query=urlencode({"token": token})))


def issue_verification_token(db: Session, user: User, settings: AppSettings) -> VerificationToken:
    verification_token = VerificationToken(
        token=str(uuid.uuid4()),
        user=user,
        expiry_date=datetime.now() + timedelta(minutes=settings.verification_token_ttl_minutes),
    )
    db.add(verification_token)
    return verification_token
