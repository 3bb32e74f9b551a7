"""Contact ORM model. Table: contacts."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Contact(OwnedModel, Base):
    """Known person. Searched by name, email, company, phone, position."""

    __tablename__ = "contacts"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    company: Mapped[str | None] = mapped_column(String, nullable=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    position: Mapped[str | None] = mapped_column(String, nullable=True)
