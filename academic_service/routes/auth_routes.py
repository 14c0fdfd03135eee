import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from academic_service.auth.dependencies import authenticate, get_auth_service
from academic_service.auth.jwt_handler import TokenClaims
from academic_service.auth.roles import Role
from academic_service.auth.service import AuthService
from academic_service.auth.user_directory import SQLAlchemyUserDirectory
from academic_service.core.errors import ServiceError, to_http_exception
from academic_service.database import get_db
from academic_service.models.user import User

router = APIRouter(tags=['auth'])


def normalize_email(value: str) -> str:
    normalized = value.strip().lower()
    local, _, domain = normalized.partition('@')
    if not local or '.' not in domain:
        raise ValueError('A valid email address is required.')
    return normalized


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=100)
    password: str = Field(..., min_length=6)
    role: Role | None = None

    @field_validator('username', mode='before')
    @classmethod
    def validate_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    email: str
    role: Role
    is_active: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    token_type: str = 'bearer'
    user: UserResponse


@router.post('/register', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    candidate = User(username=data.username, email=data.email, role=data.role.value if data.role else None)
    try:
        return auth_service.register(candidate, data.password)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc


@router.post('/login', response_model=AuthResponse)
def login(data: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    try:
        token, user = auth_service.login(data.email, data.password)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    return AuthResponse(token=token, user=UserResponse.model_validate(user))


@router.get('/me', response_model=UserResponse)
def me(claims: TokenClaims = Depends(authenticate), db: Session = Depends(get_db)):
    try:
        user = SQLAlchemyUserDirectory(db).find_by_id(claims.user_id)
    except ServiceError as exc:
        raise to_http_exception(exc) from exc

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='User not found')
    return user
