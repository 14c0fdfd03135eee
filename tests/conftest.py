import os
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from academic_service.auth.jwt_handler import TokenService, TokenSettings  # noqa: E402
from academic_service.core import config  # noqa: E402
from academic_service.database import Base  # noqa: E402
from academic_service.models import course, enrollment, lecturer, student, user  # noqa: E402,F401

TEST_SECRET = 'test-secret-key-that-is-long-enough-for-hs256'


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'BCRYPT_ROUNDS', 4)


@pytest.fixture
def db():
    engine = create_engine(
        'sqlite:///:memory:',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def token_settings() -> TokenSettings:
    return TokenSettings(secret_key=TEST_SECRET, algorithm='HS256', expires=timedelta(minutes=30))


@pytest.fixture
def token_service(token_settings: TokenSettings) -> TokenService:
    return TokenService(token_settings)
