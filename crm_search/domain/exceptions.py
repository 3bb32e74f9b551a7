"""Domain exceptions for crm-search.

Only fully invalid requests raise; partial sub-operation failures (one
adapter, one dashboard tier, the cache) are recovered where they happen.
Presentation layer maps these to HTTP responses in exception handlers.
"""

from typing import Any


class CrmSearchException(Exception):
    """Base exception for all crm-search errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CrmSearchException):
    """Raised when input validation fails (e.g. unknown dashboard tier)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CrmSearchException):
    """Raised when the bearer credential is missing, invalid or expired."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class SqlNotConfiguredException(CrmSearchException):
    """Raised when an operation requires the database but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
