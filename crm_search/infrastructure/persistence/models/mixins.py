"""SQLAlchemy mixins shared by the CRM entity tables.

Provides: CuidMixin, OwnerMixin, TimestampMixin and the combined
OwnedModel. Every searchable row belongs to exactly one principal
(user_id); queries must always filter on it.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from crm_search.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class OwnerMixin:
    """Mixin for principal-owned rows. Users live in the identity provider (no FK)."""

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(String, nullable=False, index=True)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class OwnedModel(CuidMixin, OwnerMixin, TimestampMixin):
    """Combined mixin: CUID + user_id + created_at/updated_at."""

    __abstract__ = True
