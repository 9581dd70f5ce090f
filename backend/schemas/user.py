from datetime import date, datetime

from pydantic import BaseModel, field_validator

from backend.models.doctor import Doctor
from backend.models.patient import Patient
from backend.models.user import Gender, User, UserRole

MIN_PASSWORD_LENGTH = 8


class CreateUserRequest(BaseModel):
    full_name: str
    email: str
    password: str
    role: UserRole
    phone: str | None = None
    address: str | None = None
    gender: Gender | None = None
    date_of_birth: date | None = None
    avatar_url: str | None = None

    # patient profile
    insurance_number: str | None = None
    national_id: str | None = None
    medical_history: str | None = None

    # doctor profile
    department: str | None = None
    specialization: str | None = None
    bio: str | None = None

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        local_part, at, domain = normalized.rpartition('@')
        if not at or not local_part or not domain:
            raise ValueError('A valid email is required.')
        if any(char.isspace() or not char.isprintable() for char in normalized):
            raise ValueError('Email must not contain whitespace or control characters.')
        return normalized

    @field_validator('full_name')
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Full name is required.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        return value


class ReviewDoctorRegistrationRequest(BaseModel):
    is_approved: bool
    reject_reason: str | None = None


class UpdateUserActiveRequest(BaseModel):
    is_active: bool


class UserResponse(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str | None = None
    address: str | None = None
    gender: Gender | None = None
    date_of_birth: date | None = None
    avatar_url: str | None = None
    role: UserRole
    is_verified: bool
    is_active: bool
    is_approved: bool
    created_at: datetime | None = None

    insurance_number: str | None = None
    national_id: str | None = None
    medical_history: str | None = None

    department: str | None = None
    specialization: str | None = None
    bio: str | None = None
    rating_avg: float | None = None

    class Config:
        from_attributes = True


class PageResponse(BaseModel):
    items: list[UserResponse]
    page: int
    size: int
    total: int


def to_user_response(user: User, profile: Patient | Doctor | None = None) -> UserResponse:
    response = UserResponse.model_validate(user)
    if isinstance(profile, Patient):
        response.insurance_number = profile.insurance_number
        response.national_id = profile.national_id
        response.medical_history = profile.medical_history
    elif isinstance(profile, Doctor):
        response.department = profile.department
        response.specialization = profile.specialization
        response.bio = profile.bio
        response.rating_avg = profile.rating_avg
    return response
