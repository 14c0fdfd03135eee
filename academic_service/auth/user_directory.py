"""Lookup and persistence of user accounts.

``UserDirectory`` is the seam the auth service depends on; the SQLAlchemy
implementation is the one wired into the API.
"""

import logging
import uuid
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academic_service.core.errors import PersistenceError
from academic_service.models.user import User

logger = logging.getLogger(__name__)


class UserDirectory(Protocol):
    def create(self, user: User) -> None: ...

    def find_by_id(self, user_id: uuid.UUID) -> User | None: ...

    def find_by_email(self, email: str) -> User | None: ...

    def find_by_username(self, username: str) -> User | None: ...


class SQLAlchemyUserDirectory:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> None:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Failed to persist user %s", user.username)
            raise PersistenceError("Failed to persist user.") from exc

    def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return self._first(User.id == user_id)

    def find_by_email(self, email: str) -> User | None:
        return self._first(User.email == email)

    def find_by_username(self, username: str) -> User | None:
        return self._first(User.username == username)

    def _first(self, criterion) -> User | None:
        try:
            return self.db.query(User).filter(criterion).first()
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed")
            raise PersistenceError("User lookup failed.") from exc
