import logging

from academic_service.auth.jwt_handler import TokenService
from academic_service.auth.passwords import hash_password, verify_password
from academic_service.auth.roles import DEFAULT_ROLE, Role
from academic_service.auth.user_directory import UserDirectory
from academic_service.core.errors import (
    AccountInactiveError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    PersistenceError,
    PersistenceFailedError,
)
from academic_service.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    """Registration and login on top of a user directory and a token service."""

    def __init__(self, users: UserDirectory, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def register(self, candidate: User, password: str) -> User:
        # Uniqueness checks run before hashing so doomed requests stay cheap.
        if self.users.find_by_email(candidate.email) is not None:
            raise DuplicateEmailError()
        if self.users.find_by_username(candidate.username) is not None:
            raise DuplicateUsernameError()

        candidate.hashed_password = hash_password(password)
        candidate.role = Role(candidate.role).value if candidate.role else DEFAULT_ROLE.value
        candidate.is_active = True

        try:
            self.users.create(candidate)
        except PersistenceError as exc:
            raise PersistenceFailedError() from exc

        logger.info("Registered user %s (%s) as %s", candidate.username, candidate.id, candidate.role)
        return candidate

    def login(self, email: str, password: str) -> tuple[str, User]:
        user = self.users.find_by_email(email)
        if user is None:
            logger.warning("Login rejected: unknown email")
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.warning("Login rejected: inactive account %s", user.id)
            raise AccountInactiveError()

        if not verify_password(password, user.hashed_password):
            logger.warning("Login rejected: wrong password for %s", user.id)
            raise InvalidCredentialsError()

        token = self.tokens.issue(user.id, user.email, Role(user.role))
        logger.info("Login: %s (%s)", user.username, user.id)
        return token, user
