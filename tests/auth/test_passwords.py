import pytest

from academic_service.auth.passwords import hash_password, verify_password
from academic_service.core.errors import HashingError


def test_hash_password_is_self_describing_and_salted() -> None:
    first = hash_password('secret1')
    second = hash_password('secret1')

    assert first.startswith('$2b$04$')
    assert first != second
    assert 'secret1' not in first


@pytest.mark.parametrize('password', ['secret1', '', 'pässwörd ✓', 'x' * 200])
def test_verify_password_accepts_matching_password(password: str) -> None:
    assert verify_password(password, hash_password(password)) is True


def test_verify_password_rejects_different_password() -> None:
    password_hash = hash_password('secret1')

    assert verify_password('secret2', password_hash) is False
    assert verify_password('Secret1', password_hash) is False


@pytest.mark.parametrize('malformed', ['', 'not-a-hash', '$2b$04$short', 'ünicode'])
def test_verify_password_returns_false_for_malformed_hash(malformed: str) -> None:
    assert verify_password('secret1', malformed) is False


def test_hash_password_uses_explicit_rounds() -> None:
    assert hash_password('secret1', rounds=5).startswith('$2b$05$')


def test_hash_password_wraps_internal_failure() -> None:
    with pytest.raises(HashingError):
        hash_password('secret1', rounds=99)


def test_verify_password_ignores_bytes_past_bcrypt_limit() -> None:
    prefix = 'a' * 72
    password_hash = hash_password(prefix + 'tail-one')

    assert verify_password(prefix + 'tail-two', password_hash) is True
    assert verify_password(prefix, password_hash) is True
    assert verify_password('b' + prefix[1:] + 'tail-one', password_hash) is False


def test_truncation_counts_utf8_bytes_not_characters() -> None:
    password = 'é' * 36
    password_hash = hash_password(password + 'ignored')

    assert verify_password(password, password_hash) is True
    assert verify_password('é' * 35, password_hash) is False
