"""Error codes raised by the service layer.

Every failure a workflow can report is a member of ``ErrorCode``. The HTTP
layer maps ``ErrorKind`` to a status code; services never see HTTP.
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    FORBIDDEN = "forbidden"
    UNAUTHORIZED = "unauthorized"


class ErrorCode(Enum):
    # (code, message, kind)
    USER_EXISTED = (1001, "User with this email already exists.", ErrorKind.CONFLICT)
    USER_NOT_EXIST = (1002, "User does not exist.", ErrorKind.NOT_FOUND)
    USER_NOT_FOUND_FROM_TOKEN = (1003, "User not found.", ErrorKind.NOT_FOUND)
    ROLE_NOT_ALLOWED = (1004, "This role is not allowed to perform the action.", ErrorKind.FORBIDDEN)
    UNAUTHORIZED = (1005, "You do not have permission.", ErrorKind.FORBIDDEN)
    UNAUTHENTICATED = (1006, "Authentication required.", ErrorKind.UNAUTHORIZED)
    INVALID_CREDENTIALS = (1007, "Email or password is incorrect.", ErrorKind.UNAUTHORIZED)
    ACCOUNT_NOT_ACTIVATED = (1008, "Account has not been activated.", ErrorKind.FORBIDDEN)
    ACCOUNT_ALREADY_ACTIVE = (1009, "Account is already active.", ErrorKind.CONFLICT)
    ACCOUNT_ALREADY_DEACTIVATE = (1010, "Account is already deactivated.", ErrorKind.CONFLICT)
    DOCTOR_ALREADY_APPROVED = (1011, "Doctor registration is already approved.", ErrorKind.CONFLICT)
    DOCTOR_ALREADY_REJECTED = (1012, "Doctor registration is already rejected.", ErrorKind.CONFLICT)
    TOKEN_INVALID = (1013, "Verification token is invalid.", ErrorKind.NOT_FOUND)
    TOKEN_EXPIRED = (1014, "Verification token has expired.", ErrorKind.CONFLICT)

    SCHEDULE_NOT_FOUND = (2001, "Schedule not found.", ErrorKind.NOT_FOUND)
    SCHEDULE_NOT_AVAILABLE = (2002, "Schedule is not available.", ErrorKind.CONFLICT)
    SCHEDULE_ALREADY_BOOKED = (2003, "Schedule is already booked.", ErrorKind.CONFLICT)

    PATIENT_INFO_REQUIRED = (3001, "Insurance number and national ID are required for patients.", ErrorKind.VALIDATION)
    DOCTOR_INFO_REQUIRED = (3002, "Department and specialization are required for doctors.", ErrorKind.VALIDATION)

    def __init__(self, code: int, message: str, kind: ErrorKind):
        self.code = code
        self.message = message
        self.kind = kind

    @property
    def is_validation(self) -> bool:
        return self.kind is ErrorKind.VALIDATION


class AppException(Exception):
    def __init__(self, error_code: ErrorCode, detail: str | None = None):
        super().__init__(detail or error_code.message)
        self.error_code = error_code
        self.detail = detail or error_code.message

    def __repr__(self) -> str:
        return f"AppException({self.error_code.name})"
