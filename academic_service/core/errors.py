"""Error types raised by the auth and record layers.

Each error carries the HTTP status the API boundary answers with; route
handlers turn them into ``HTTPException`` through :func:`to_http_exception`.
"""

from fastapi import HTTPException, status


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PersistenceError(ServiceError):
    default_message = "Database operation failed."


class HashingError(ServiceError):
    default_message = "Password hashing failed."


class AuthorizationError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient permissions"


class AuthError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication failed."


class DuplicateEmailError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already exists."


class DuplicateUsernameError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already exists."


class InvalidCredentialsError(AuthError):
    default_message = "Invalid email or password."


class AccountInactiveError(AuthError):
    default_message = "User account is inactive."


class InvalidTokenError(AuthError):
    default_message = "Invalid token."


class TokenExpiredError(AuthError):
    default_message = "Token has expired."


class MissingRoleError(AuthError):
    default_message = "User role not found"


class PersistenceFailedError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to save user."


def to_http_exception(exc: ServiceError) -> HTTPException:
    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=exc.status_code, detail=exc.message, headers=headers)
