import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.dependencies import get_current_user
from backend.auth.users import (
    MIN_PASSWORD_LENGTH,
    EmailAlreadyRegistered,
    authenticate_user,
    create_user,
    normalize_email,
)
from backend.core.errors import database_error
from backend.core.schemas import ApiModel, ApiRequest
from backend.database import get_db
from backend.models.user import User

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    is_admin: bool
    is_banned: bool
    ban_reason: str | None = None
    banned_at: datetime | None = None
    banned_by: str | None = None
    created_at: datetime


class RegisterRequest(ApiRequest):
    name: str
    email: str
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        normalized = normalize_email(value)
        local, _, domain = normalized.partition('@')
        if not local or not domain:
            raise ValueError('A valid email address is required.')
        return normalized

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        return value


class LoginRequest(ApiRequest):
    email: str
    password: str


class AuthResponse(ApiModel):
    token: str
    user: UserResponse


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        user = create_user(db, name=data.name, email=data.email, password=data.password)
    except (EmailAlreadyRegistered, IntegrityError) as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='Email already registered.',
        ) from exc
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    logger.info('Registered user %s', user.id)
    token = jwt_handler.create_access_token(user_id=user.id, is_admin=user.is_admin)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = authenticate_user(db, data.email, data.password)
    except SQLAlchemyError as exc:
        raise database_error(db) from exc

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid credentials.')
    if user.is_banned:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Account suspended.')

    token = jwt_handler.create_access_token(user_id=user.id, is_admin=user.is_admin)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get('/me', response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
