"""Student model definitions."""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid, func

from academic_service.database import Base

STUDENT_STATUSES = ("active", "inactive", "graduated", "dropped")


class Student(Base):
    """Represents a student academic record."""
    __tablename__ = "students"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    nim = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    phone = Column(String(20))
    address = Column(Text)
    date_of_birth = Column(Date)
    gender = Column(String(10))  # male/female
    major = Column(String(100), nullable=False)
    enrollment_year = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="active")
    gpa = Column(Numeric(3, 2, asdecimal=False), default=0.0)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, index=True)
