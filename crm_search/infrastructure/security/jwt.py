"""JWT verification for the bearer tokens issued by the identity provider.

create_access_token exists for local development and tests; production
tokens come from the CRM's auth service signed with the same secret.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from crm_search.application.dtos.principal import Principal
from crm_search.core.config import get_settings
from crm_search.domain.exceptions import AuthenticationException


def create_access_token(
    subject: str,
    email: str | None = None,
    role: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for subject (the principal id).

    Args:
        subject: Principal id, stored in the sub claim.
        email: Optional email claim.
        role: Optional role claim.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": subject, "exp": datetime.now(UTC) + expires_delta}
    if email:
        claims["email"] = email
    if role:
        claims["role"] = role
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Enforces presence of exp and sub.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


class JwtPrincipalResolver:
    """Resolve a bearer token to the Principal it was issued for."""

    def resolve(self, token: str) -> Principal:
        try:
            payload = verify_token(token)
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e
        return Principal(
            id=str(payload["sub"]),
            email=payload.get("email"),
            role=payload.get("role"),
        )
