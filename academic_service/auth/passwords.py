"""
Password hashing and verification.

Uses bcrypt, so every hash embeds its own salt and work factor
(``$2b$<rounds>$<salt><digest>``).
"""

import bcrypt

from academic_service.core import config
from academic_service.core.errors import HashingError

# bcrypt only reads the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with a fresh random salt."""
    try:
        salt = bcrypt.gensalt(rounds=rounds or config.BCRYPT_ROUNDS)
        return bcrypt.hashpw(_password_bytes(password), salt).decode("ascii")
    except (ValueError, TypeError) as exc:
        raise HashingError() from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("ascii"))
    except (ValueError, TypeError, AttributeError):
        return False
