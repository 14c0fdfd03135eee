"""Enrollment model definitions."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid, func

from academic_service.database import Base


class Enrollment(Base):
    """Represents a student taking a course in a given academic term."""
    __tablename__ = "enrollments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    student_id = Column(Uuid, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    academic_year = Column(String(10), nullable=False)
    semester = Column(Integer, nullable=False)
    enrollment_date = Column(DateTime, default=func.now())
    status = Column(String(20), nullable=False, default="enrolled")  # enrolled/completed/dropped/failed
    grade = Column(String(2))
    score = Column(Numeric(5, 2, asdecimal=False))
    attendance_percentage = Column(Numeric(5, 2, asdecimal=False))
    remarks = Column(Text)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, index=True)
