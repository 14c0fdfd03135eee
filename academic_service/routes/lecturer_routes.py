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
from academic_service.models.lecturer import Lecturer

logger = logging.getLogger(__name__)

router = APIRouter(tags=['lecturers'], dependencies=[Depends(authenticate)])

LecturerStatus = Literal['active', 'inactive', 'retired']
Gender = Literal['male', 'female']


class CreateLecturerRequest(BaseModel):
    nip: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=100)
    phone: str | None = None
    department: str = Field(..., min_length=1, max_length=100)
    position: str | None = None
    specialization: str | None = None
    education_level: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None


class UpdateLecturerRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=100)
    phone: str | None = None
    department: str | None = Field(default=None, min_length=1, max_length=100)
    position: str | None = None
    specialization: str | None = None
    education_level: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    status: LecturerStatus | None = None


class LecturerResponse(BaseModel):
    id: uuid.UUID
    nip: str
    name: str
    email: str
    phone: str | None = None
    department: str
    position: str | None = None
    specialization: str | None = None
    education_level: str | None = None
    status: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


def database_unavailable() -> HTTPException:
    logger.exception('Lecturer query failed')
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail='Database unavailable. Verify DATABASE_URL and database credentials.',
    )


def get_lecturer_or_404(lecturer_id: uuid.UUID, db: Session) -> Lecturer:
    lecturer = db.query(Lecturer).filter(Lecturer.id == lecturer_id, Lecturer.deleted_at.is_(None)).first()
    if lecturer is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Lecturer not found.',
        )
    return lecturer


@router.post(
    '',
    response_model=LecturerResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.STAFF))],
)
def create_lecturer(data: CreateLecturerRequest, db: Session = Depends(get_db)):
    try:
        lecturer = Lecturer(**data.model_dump(), status='active')
        db.add(lecturer)
        db.commit()
        db.refresh(lecturer)

        logger.info('Created lecturer %s (%s)', lecturer.nip, lecturer.id)
        return lecturer
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='A lecturer with this NIP or email already exists.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.get('', response_model=list[LecturerResponse])
def list_lecturers(
    department: str | None = Query(default=None),
    lecturer_status: LecturerStatus | None = Query(default=None, alias='status'),
    search: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    try:
        query = db.query(Lecturer).filter(Lecturer.deleted_at.is_(None))
        if department:
            query = query.filter(Lecturer.department.ilike(f'%{department}%'))
        if lecturer_status:
            query = query.filter(Lecturer.status == lecturer_status)
        if search:
            query = query.filter(or_(Lecturer.name.ilike(f'%{search}%'), Lecturer.nip.ilike(f'%{search}%')))

        return query.order_by(Lecturer.created_at.desc()).all()
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.get('/{lecturer_id}', response_model=LecturerResponse)
def get_lecturer(lecturer_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        return get_lecturer_or_404(lecturer_id, db)
    except SQLAlchemyError as exc:
        raise database_unavailable() from exc


@router.put(
    '/{lecturer_id}',
    response_model=LecturerResponse,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.STAFF))],
)
def update_lecturer(lecturer_id: uuid.UUID, data: UpdateLecturerRequest, db: Session = Depends(get_db)):
    try:
        lecturer = get_lecturer_or_404(lecturer_id, db)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(lecturer, field, value)

        db.commit()
        db.refresh(lecturer)
        return lecturer
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Lecturer update conflicts with an existing record.',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc


@router.delete(
    '/{lecturer_id}',
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(Role.ADMIN))],
)
def delete_lecturer(lecturer_id: uuid.UUID, db: Session = Depends(get_db)):
    try:
        lecturer = get_lecturer_or_404(lecturer_id, db)
        lecturer.deleted_at = datetime.now()
        db.commit()
        logger.info('Deleted lecturer %s', lecturer_id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_unavailable() from exc
