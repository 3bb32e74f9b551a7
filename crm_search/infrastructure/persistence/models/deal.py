"""Deal ORM model. Table: deals (dashboard aggregates only; not searchable)."""

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Deal(OwnedModel, Base):
    """Closed or in-flight deal. status: OPEN | WON | LOST."""

    __tablename__ = "deals"

    name: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="OPEN")
