import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from academic_service.core import config
from academic_service.database import Base, engine
from academic_service.models import course, enrollment, lecturer, student, user  # noqa: F401
from academic_service.routes import auth_routes, lecturer_routes, student_routes

config.configure_logging()
config.validate_runtime_config()

logger = logging.getLogger(__name__)

app = FastAPI(title=config.APP_NAME, version='1.0.0')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(exc.errors())},
    )


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/health')
def health():
    return {'status': 'ok', 'message': 'Service is running'}


@app.get('/api/v1/ping')
def ping():
    return {'message': 'pong'}


app.include_router(auth_routes.router, prefix='/api/v1/auth')
app.include_router(student_routes.router, prefix='/api/v1/students')
app.include_router(lecturer_routes.router, prefix='/api/v1/lecturers')
