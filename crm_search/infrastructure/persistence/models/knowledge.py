"""Knowledge artifact ORM models (nodes, maps, notes).

Advertised-but-unreleased feature: rows are searchable for discoverability
but every hit is returned locked.
"""

from typing import Any

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class KnowledgeNode(OwnedModel, Base):
    """Node in the knowledge graph. Table: second_brain_nodes."""

    __tablename__ = "second_brain_nodes"

    label: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, default="concept")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)


class KnowledgeMap(OwnedModel, Base):
    """Mind map. Table: second_brain_maps."""

    __tablename__ = "second_brain_maps"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class KnowledgeNote(OwnedModel, Base):
    """Free-form note. Table: second_brain_notes."""

    __tablename__ = "second_brain_notes"

    title: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    folder: Mapped[str | None] = mapped_column(String, nullable=True)
    tags: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    starred: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
