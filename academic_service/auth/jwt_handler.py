import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from academic_service.auth.roles import Role
from academic_service.core import config
from academic_service.core.errors import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "email", "role", "iat", "exp"]


@dataclass(frozen=True)
class TokenSettings:
    secret_key: str
    algorithm: str = "HS256"
    expires: timedelta = timedelta(hours=24)

    @classmethod
    def from_config(cls) -> "TokenSettings":
        return cls(
            secret_key=config.JWT_SECRET_KEY,
            algorithm=config.JWT_ALGORITHM,
            expires=timedelta(minutes=config.JWT_EXPIRES_MINUTES),
        )


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by an access token."""

    user_id: uuid.UUID
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and validates signed, time-limited access tokens.

    The settings are fixed at construction, so one instance can be shared
    by every request.
    """

    def __init__(self, settings: TokenSettings, clock: Callable[[], datetime] = _utcnow):
        self.settings = settings
        self._clock = clock

    def issue(self, user_id: uuid.UUID | str, email: str, role: Role | str) -> str:
        issued_at = self._clock()
        payload = {
            "sub": str(user_id),
            "email": email,
            "role": Role(role).value,
            "iat": issued_at,
            "exp": issued_at + self.settings.expires,
        }
        return jwt.encode(payload, self.settings.secret_key, algorithm=self.settings.algorithm)

    def validate(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self.settings.secret_key,
                algorithms=[self.settings.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            raise InvalidTokenError() from exc

        try:
            return TokenClaims(
                user_id=uuid.UUID(payload["sub"]),
                email=payload["email"],
                role=Role(payload["role"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (ValueError, TypeError) as exc:
            raise InvalidTokenError() from exc
