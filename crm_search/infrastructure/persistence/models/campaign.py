"""Email campaign ORM model. Table: campaigns."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Campaign(OwnedModel, Base):
    """Email marketing campaign. status: draft | scheduled | active | sent | paused."""

    __tablename__ = "campaigns"

    name: Mapped[str] = mapped_column(String, nullable=False)
    subject: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    sent_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
