"""User model definitions."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String, Uuid, func

from academic_service.auth.roles import DEFAULT_ROLE
from academic_service.database import Base


class User(Base):
    """Represents an account that can authenticate against the API."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=DEFAULT_ROLE.value)  # admin/staff/student
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
