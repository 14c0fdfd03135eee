"""Course model definitions."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, Uuid, func

from academic_service.database import Base


class Course(Base):
    """Represents a course offered by a department."""
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("credits > 0", name="ck_courses_credits_positive"),
        CheckConstraint("semester > 0", name="ck_courses_semester_positive"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    credits = Column(Integer, nullable=False)
    semester = Column(Integer, nullable=False)
    department = Column(String(100), nullable=False)
    course_type = Column(String(50))  # mandatory/elective
    max_students = Column(Integer, default=40)
    lecturer_id = Column(Uuid, ForeignKey("lecturers.id", ondelete="SET NULL"))
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime, index=True)
