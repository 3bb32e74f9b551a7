"""Bearer token verification and principal resolution."""

from datetime import timedelta

import pytest

from crm_search.domain.exceptions import AuthenticationException
from crm_search.infrastructure.security.jwt import (
    JwtPrincipalResolver,
    create_access_token,
    verify_token,
)


def test_resolves_principal_from_claims() -> None:
    token = create_access_token("user-7", email="u7@example.test", role="admin")
    principal = JwtPrincipalResolver().resolve(token)
    assert principal.id == "user-7"
    assert principal.email == "u7@example.test"
    assert principal.role == "admin"


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-7", expires_delta=timedelta(seconds=-10))
    with pytest.raises(AuthenticationException):
        JwtPrincipalResolver().resolve(token)


def test_garbage_token_raises_value_error() -> None:
    with pytest.raises(ValueError):
        verify_token("not-a-jwt")
