from collections.abc import Callable
from functools import lru_cache

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from academic_service.auth.jwt_handler import TokenClaims, TokenService, TokenSettings
from academic_service.auth.roles import Role, is_allowed
from academic_service.auth.service import AuthService
from academic_service.auth.user_directory import SQLAlchemyUserDirectory
from academic_service.core.errors import (
    AuthError,
    AuthorizationError,
    MissingRoleError,
    to_http_exception,
)
from academic_service.database import get_db

authorization_header = APIKeyHeader(name="Authorization", auto_error=False, scheme_name="BearerAuth")


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(TokenSettings.from_config())


def get_auth_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(SQLAlchemyUserDirectory(db), token_service)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise _unauthorized("Missing authorization header")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise _unauthorized("Invalid authorization format")
    return parts[1]


def authenticate(
    authorization: str | None = Security(authorization_header),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    token = extract_bearer_token(authorization)
    try:
        return token_service.validate(token)
    except AuthError as exc:
        raise _unauthorized(f"Invalid or expired token: {exc.message}") from exc


def check_role(claims: TokenClaims | None, allowed: tuple[Role, ...]) -> TokenClaims:
    if claims is None or claims.role is None:
        raise MissingRoleError()
    if not is_allowed(claims.role, allowed):
        raise AuthorizationError()
    return claims


def require_roles(*roles: Role) -> Callable[..., TokenClaims]:
    allowed = tuple(roles)

    def role_gate(claims: TokenClaims = Depends(authenticate)) -> TokenClaims:
        try:
            return check_role(claims, allowed)
        except (MissingRoleError, AuthorizationError) as exc:
            raise to_http_exception(exc) from exc

    return role_gate
