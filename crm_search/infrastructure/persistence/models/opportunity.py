"""Opportunity ORM model. Table: opportunities."""

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models.mixins import OwnedModel


class Opportunity(OwnedModel, Base):
    """Pipeline opportunity. value feeds the dashboard pipeline total."""

    __tablename__ = "opportunities"

    name: Mapped[str] = mapped_column(String, nullable=False)
    company: Mapped[str | None] = mapped_column(String, nullable=True)
    value: Mapped[float | None] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)
    stage: Mapped[str] = mapped_column(String, nullable=False, default="prospecting")
    probability: Mapped[int | None] = mapped_column(Integer, nullable=True)
