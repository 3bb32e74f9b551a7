"""Activity ORM model. Table: activities."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Activity(OwnedModel, Base):
    """Call, meeting, task or email logged against a lead or contact."""

    __tablename__ = "activities"

    title: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False, default="task")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[str] = mapped_column(String, nullable=False, default="open")
    lead_id: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_id: Mapped[str | None] = mapped_column(String, nullable=True)
