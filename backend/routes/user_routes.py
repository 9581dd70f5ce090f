from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_user, require_admin
from backend.core.config import AppSettings, get_settings
from backend.database import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, get_db
from backend.models.user import User
from backend.routes.common import database_unavailable
from backend.schemas.user import (
    CreateUserRequest,
    PageResponse,
    ReviewDoctorRegistrationRequest,
    UpdateUserActiveRequest,
    UserResponse,
)
from backend.services.notification_service import NotificationGateway, get_notifier
from backend.services.user_service import UserService

router = APIRouter(tags=['users'])


def get_user_service(
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
    notifier: NotificationGateway = Depends(get_notifier),
) -> UserService:
    return UserService(db, settings, notifier)


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(data: CreateUserRequest, service: UserService = Depends(get_user_service)):
    try:
        return service.create_user(data)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/me', response_model=UserResponse)
def get_my_profile(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_user_by_user_id(current_user.id)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('', response_model=PageResponse)
def list_users(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_all_users(page, size)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/pending-doctors', response_model=PageResponse)
def list_pending_doctors(
    page: int = Query(default=0, ge=0),
    size: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_pending_doctors(page, size)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.patch('/{user_id}/review', status_code=status.HTTP_204_NO_CONTENT)
def review_doctor_registration(
    user_id: int,
    data: ReviewDoctorRegistrationRequest,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        service.review_doctor_registration(user_id, data.is_approved, data.reject_reason)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.patch('/{user_id}/active', status_code=status.HTTP_204_NO_CONTENT)
def update_user_active_status(
    user_id: int,
    data: UpdateUserActiveRequest,
    _admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
):
    try:
        service.update_user_active_status(user_id, data.is_active)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
