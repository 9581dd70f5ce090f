import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./caresync.db")

APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:8000")
ACTIVATION_PATH = os.getenv("ACTIVATION_PATH", "/auth/activate")
VERIFICATION_TOKEN_TTL_MINUTES = int(os.getenv("VERIFICATION_TOKEN_TTL_MINUTES", "60"))

MAIL_SENDER = os.getenv("MAIL_SENDER", "CareSync <no-reply@caresync.local>")
SMTP_HOST = os.getenv("SMTP_HOST", "")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME = os.getenv("SMTP_USERNAME", "")
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_USE_TLS = _get_bool(os.getenv("SMTP_USE_TLS"), default=True)

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ["http://localhost:4200"])


@dataclass(frozen=True)
class AppSettings:
    """Values the services need at runtime, resolved once at startup."""

    base_url: str
    activation_path: str = "/auth/activate"
    verification_token_ttl_minutes: int = 60
    mail_sender: str = ""
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    admin_email: str = ""
    admin_password: str = ""


def load_settings() -> AppSettings:
    return AppSettings(
        base_url=APP_BASE_URL,
        activation_path=ACTIVATION_PATH,
        verification_token_ttl_minutes=VERIFICATION_TOKEN_TTL_MINUTES,
        mail_sender=MAIL_SENDER,
        smtp_host=SMTP_HOST,
        smtp_port=SMTP_PORT,
        smtp_username=SMTP_USERNAME,
        smtp_password=SMTP_PASSWORD,
        smtp_use_tls=SMTP_USE_TLS,
        admin_email=ADMIN_EMAIL.strip().lower(),
        admin_password=ADMIN_PASSWORD,
    )


def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if APP_ENV.lower() == "production" and not SMTP_HOST:
        raise RuntimeError("SMTP_HOST must be set in production.")


@lru_cache
def get_settings() -> AppSettings:
    return load_settings()
