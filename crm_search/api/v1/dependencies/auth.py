"""Bearer authentication dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from crm_search.application.dtos.principal import Principal
from crm_search.application.interfaces.services import IPrincipalResolver
from crm_search.domain.exceptions import AuthenticationException
from crm_search.infrastructure.security.jwt import JwtPrincipalResolver

_http_bearer = HTTPBearer(auto_error=False)


def get_principal_resolver() -> IPrincipalResolver:
    """Principal resolver (composition root)."""
    return JwtPrincipalResolver()


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    resolver: Annotated[IPrincipalResolver, Depends(get_principal_resolver)],
) -> Principal:
    """Return the authenticated caller or raise 401 before any core work runs."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException()
    return resolver.resolve(credentials.credentials)
