"""Form and form submission ORM models. Tables: forms, form_submissions."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Form(OwnedModel, Base):
    """Lead-capture form. status: draft | published | archived."""

    __tablename__ = "forms"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    submission_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class FormSubmission(OwnedModel, Base):
    """One submission of a form (counted on the dashboard only)."""

    __tablename__ = "form_submissions"

    form_id: Mapped[str] = mapped_column(
        String, ForeignKey("forms.id", ondelete="CASCADE"), nullable=False, index=True
    )
