"""Lead ORM model. Table: leads."""

from sqlalchemy import Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Lead(OwnedModel, Base):
    """Prospect not yet converted. Searched by name, email, company, phone."""

    __tablename__ = "leads"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    company: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="NEW")
    value: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)

    __table_args__ = (Index("ix_leads_user_status", "user_id", "status"),)
