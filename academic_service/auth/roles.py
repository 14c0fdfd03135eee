from collections.abc import Iterable
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    STUDENT = "student"


DEFAULT_ROLE = Role.STUDENT


def is_allowed(role: Role | None, allowed: Iterable[Role]) -> bool:
    """Return True when ``role`` is one of the ``allowed`` roles."""
    if role is None:
        return False
    return role in set(allowed)
