from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth.dependencies import get_current_user
from backend.core.config import AppSettings, get_settings
from backend.database import get_db
from backend.models.user import User
from backend.routes.common import database_unavailable
from backend.schemas.auth import LoginRequest, TokenResponse
from backend.services.auth_service import AuthService

router = APIRouter(tags=['auth'])


@router.post('/login', response_model=TokenResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
):
    try:
        access_token = AuthService(db, settings).authenticate(data.email, data.password)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
    return TokenResponse(access_token=access_token)


@router.get('/activate')
def activate_account(
    token: str = Query(...),
    db: Session = Depends(get_db),
    settings: AppSettings = Depends(get_settings),
):
    try:
        user = AuthService(db, settings).activate_account(token)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc
    return {'message': 'Account activated', 'email': user.email}


@router.get('/me')
def me(current_user: User = Depends(get_current_user)):
    return {'email': current_user.email, 'role': current_user.role.value}
