"""Authenticated caller resolved from a bearer credential."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Caller on whose behalf all rows are scoped. Only id reaches the core."""

    id: str
    email: str | None
    role: str | None
