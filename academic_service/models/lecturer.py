"""Lecturer model definitions."""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Uuid, func

from academic_service.database import Base

LECTURER_STATUSES = ("active", "inactive", "retired")


class Lecturer(Base):
    """Represents a lecturer staff record."""
    __tablename__ = "lecturers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nip = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    phone = Column(String(20))
    address = Column(Text)
    date_of_birth = Column(Date)
    gender = Column(String(10))
    department = Column(String(100), nullable=False)
    position = Column(String(50))
    specialization = Column(String(100))
    education_level = Column(String(50))
    status = Column(String(20), nullable=False, default="active")
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, index=True)
