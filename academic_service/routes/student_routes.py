import logging
import uuid
from datetime import date, datetime
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from academic_service.auth.dependencies import authenticate, require_roles
from academic_service.auth.roles import Role
from academic_service.database import get_db
from academic_service.models.student import Student

logger = logging.getLogger(__name__)

router = APIRouter(tags=['students'], dependencies=[Depends(authenticate)])

StudentStatus = Literal['active', 'inactive', 'graduated', 'dropped']
Gender = Literal['male', 'female']


class CreateStudentRequest(BaseModel):
    nim: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    major: str = Field(..., min_length=1, max_length=100)
    enrollment_year: int = Field(..., ge=2000)
    status: StudentStatus = 'active'


class UpdateStudentRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=100)
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    major: str | None = Field(default=None, min_length=1, max_length=100)
    enrollment_year: int | None = Field(default=None, ge=2000)
    status: StudentStatus | None = None
    gpa: float | None = Field(default=None, ge=0, le=4)


class StudentResponse(BaseModel):
    id: uuid.UUID
    nim: str
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    major: str
    enrollment_year: int
    status: str
    gpa: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


def database_unavailable() -> HTTPException:
    logger.exception('Student query failed')
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail='Database unavailable. Verify DATABASE_URL and database credentials.',
    )


def get_student_or_404(student_id: uuid.UUID, db: Session) -> Student:
    student = db.query(Student).filter(Student.id == student_id, Student.deleted_at.is_(None)).first()
    if student is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Student not found.',
        )
    return student


@router.post(
    '',
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.STAFF))],
)
def create_student(data: CreateStudentRequest, db: Session = Depends(get_db)):
    try:
        if db.query(Student).filter(Student.nim == data.nim, Student.deleted_at.is_(None)).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='NIM already exists.',
            )

        student = Student(**data.model_dump())
        db.add(student)
        db.commit()
        db.refresh(student)

        logger.info('Created student %s (%s)', student.nim, student.id)
        return student
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='A student with this NIM or email already exists.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.get('', response_model=list[StudentResponse])
def list_students(
    major: str | None = Query(default=None),
    student_status: StudentStatus | None = Query(default=None, alias='status'),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Student).filter(Student.deleted_at.is_(None))
        if major:
            query = query.filter(Student.major.ilike(f'%{major}%'))
        if student_status:
            query = query.filter(Student.status == student_status)
        if search:
            query = query.filter(or_(Student.name.ilike(f'%{search}%'), Student.nim.ilike(f'%{search}%')))

        return query.order_by(Student.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/{student_id}', response_model=StudentResponse)
def get_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return get_student_or_404(student_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.put(
    '/{student_id}',
    response_model=StudentResponse,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.STAFF))],
)
def update_student(student_id: uuid.UUID, data: UpdateStudentRequest, db: Session = Depends(get_db)):
    try:
        student = get_student_or_404(student_id, db)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(student, field, value)

        db.commit()
        db.refresh(student)
        return student
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Student update conflicts with an existing record.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.delete(
    '/{student_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(Role.ADMIN))],
)
def delete_student(student_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        student = get_student_or_404(student_id, db)
        student.deleted_at = datetime.now()
        db.commit()
        logger.info('Deleted student %s', student_id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc
