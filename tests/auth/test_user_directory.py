import uuid

import pytest
from sqlalchemy.exc import OperationalError

from academic_service.auth.user_directory import SQLAlchemyUserDirectory
from academic_service.core.errors import PersistenceError
from academic_service.models.user import User


class FailingSession:
    def __init__(self):
        self.added = []
        self.rolled_back = False

    def add(self, instance) -> None:
        self.added.append(instance)

    def commit(self) -> None:
        raise OperationalError('INSERT INTO users', {}, Exception('database is locked'))

    def refresh(self, instance) -> None:
        raise AssertionError('refresh must not run after a failed commit')

    def rollback(self) -> None:
        self.rolled_back = True

    def query(self, *entities):
        raise OperationalError('SELECT users', {}, Exception('connection refused'))


def test_create_rolls_back_and_raises_persistence_error_when_commit_fails() -> None:
    session = FailingSession()
    directory = SQLAlchemyUserDirectory(session)
    user = User(username='alice', email='a@x.com', hashed_password='hash')

    with pytest.raises(PersistenceError) as exception_info:
        directory.create(user)

    assert session.added == [user]
    assert session.rolled_back is True
    assert exception_info.value.message == 'Failed to persist user.'
    assert isinstance(exception_info.value.__cause__, OperationalError)


def test_create_leaves_session_usable_after_failed_commit(db) -> None:
    directory = SQLAlchemyUserDirectory(db)
    directory.create(User(username='alice', email='a@x.com', hashed_password='hash'))

    with pytest.raises(PersistenceError):
        directory.create(User(username='alice2', email='a@x.com', hashed_password='hash'))

    assert directory.find_by_email('a@x.com').username == 'alice'
    assert db.query(User).count() == 1


@pytest.mark.parametrize(
    ('method', 'argument'),
    [
        ('find_by_id', uuid.uuid4()),
        ('find_by_email', 'a@x.com'),
        ('find_by_username', 'alice'),
    ],
)
def test_lookups_wrap_database_errors(method: str, argument) -> None:
    directory = SQLAlchemyUserDirectory(FailingSession())

    with pytest.raises(PersistenceError) as exception_info:
        getattr(directory, method)(argument)

    assert exception_info.value.message == 'User lookup failed.'
