"""Security: bearer token verification."""

from crm_search.infrastructure.security.jwt import (
    JwtPrincipalResolver,
    create_access_token,
    verify_token,
)

__all__ = ["JwtPrincipalResolver", "create_access_token", "verify_token"]
