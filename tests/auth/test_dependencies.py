import uuid
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from academic_service.auth.dependencies import (
    authenticate,
    check_role,
    extract_bearer_token,
    get_auth_service,
    get_token_service,
    require_roles,
)
from academic_service.auth.jwt_handler import TokenClaims, TokenService, TokenSettings
from academic_service.auth.roles import Role, is_allowed
from academic_service.auth.service import AuthService
from academic_service.core.errors import AuthorizationError, MissingRoleError


def _claims(role: Role) -> TokenClaims:
    now = datetime.now(timezone.utc)
    return TokenClaims(user_id=uuid.uuid4(), email='a@x.com', role=role, issued_at=now, expires_at=now)


@pytest.mark.parametrize(
    ('role', 'allowed', 'expected'),
    [
        (Role.ADMIN, (Role.ADMIN,), True),
        (Role.STAFF, (Role.ADMIN, Role.STAFF), True),
        (Role.STUDENT, (Role.ADMIN, Role.STAFF), False),
        (Role.ADMIN, (), False),
        (None, (Role.ADMIN,), False),
    ],
)
def test_is_allowed(role, allowed, expected) -> None:
    assert is_allowed(role, allowed) is expected


@pytest.mark.parametrize(
    ('header', 'detail'),
    [
        (None, 'Missing authorization header'),
        ('', 'Missing authorization header'),
        ('Token abc', 'Invalid authorization format'),
        ('bearer abc', 'Invalid authorization format'),
        ('Bearer', 'Invalid authorization format'),
        ('Bearer a b', 'Invalid authorization format'),
        ('Bearer ', 'Invalid authorization format'),
    ],
)
def test_extract_bearer_token_rejects_bad_headers(header, detail) -> None:
    with pytest.raises(HTTPException) as exception_info:
        extract_bearer_token(header)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == detail


def test_authenticate_returns_claims_for_valid_token(token_service: TokenService) -> None:
    user_id = uuid.uuid4()
    token = token_service.issue(user_id, 'a@x.com', Role.STAFF)

    claims = authenticate(authorization=f'Bearer {token}', token_service=token_service)

    assert claims.user_id == user_id
    assert claims.role is Role.STAFF


def test_authenticate_rejects_invalid_token(token_service: TokenService) -> None:
    foreign = TokenService(TokenSettings(secret_key='another-secret-key-that-is-long-enough'))
    token = foreign.issue(uuid.uuid4(), 'a@x.com', Role.ADMIN)

    with pytest.raises(HTTPException) as exception_info:
        authenticate(authorization=f'Bearer {token}', token_service=token_service)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail.startswith('Invalid or expired token')
    assert exception_info.value.headers == {'WWW-Authenticate': 'Bearer'}


def test_check_role_without_identity_reports_missing_role() -> None:
    with pytest.raises(MissingRoleError) as exception_info:
        check_role(None, (Role.ADMIN,))

    assert exception_info.value.status_code == 401
    assert exception_info.value.message == 'User role not found'


def test_check_role_rejects_role_outside_allowed_set() -> None:
    with pytest.raises(AuthorizationError) as exception_info:
        check_role(_claims(Role.STUDENT), (Role.ADMIN, Role.STAFF))

    assert exception_info.value.status_code == 403


def test_require_roles_passes_allowed_identity_through() -> None:
    claims = _claims(Role.STAFF)
    gate = require_roles(Role.ADMIN, Role.STAFF)

    assert gate(claims=claims) is claims


def test_require_roles_translates_denial_to_http_403() -> None:
    gate = require_roles(Role.ADMIN)

    with pytest.raises(HTTPException) as exception_info:
        gate(claims=_claims(Role.STUDENT))

    assert exception_info.value.status_code == 403
    assert exception_info.value.detail == 'Insufficient permissions'


def test_require_roles_translates_missing_identity_to_http_401() -> None:
    gate = require_roles(Role.ADMIN)

    with pytest.raises(HTTPException) as exception_info:
        gate(claims=None)

    assert exception_info.value.status_code == 401
    assert exception_info.value.detail == 'User role not found'


def test_get_token_service_is_shared_across_requests() -> None:
    get_token_service.cache_clear()
    try:
        assert get_token_service() is get_token_service()
    finally:
        get_token_service.cache_clear()


def test_get_auth_service_wires_directory_and_tokens(db, token_service: TokenService) -> None:
    service = get_auth_service(db=db, token_service=token_service)

    assert isinstance(service, AuthService)
    assert service.tokens is token_service
    assert service.users.db is db
