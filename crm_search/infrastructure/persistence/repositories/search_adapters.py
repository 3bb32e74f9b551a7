"""Entity search adapters: one per searchable table, sharing one implementation.

Each adapter filters rows owned by the principal with a case-insensitive
substring match (ILIKE) over a fixed field list and returns plain row
mappings; normalization happens in the application layer.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crm_search.domain.enums import KnowledgeKind, SearchCategory
from crm_search.infrastructure.persistence.models import (
    Activity,
    Campaign,
    Contact,
    Form,
    KnowledgeMap,
    KnowledgeNode,
    KnowledgeNote,
    Lead,
    Opportunity,
)
from crm_search.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def contains_pattern(query: str) -> str:
    """Build a literal ILIKE pattern: escape %, _ and the escape char, wrap in %."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


class SqlEntitySearchAdapter:
    """Search one ORM model scoped to a principal.

    Opens its own session per call so several adapters can run
    concurrently; holds no per-request state.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[Any],
        category: SearchCategory,
        icon: str,
        search_fields: Sequence[str],
        select_fields: Sequence[str],
        sub_category: str | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.model = model
        self.category = category
        self.sub_category = sub_category
        self.icon = icon
        self.search_fields = tuple(search_fields)
        self.select_fields = tuple(select_fields)

    @property
    def name(self) -> str:
        if self.sub_category:
            return f"{self.category.value}.{self.sub_category}"
        return self.category.value

    def build_statement(self, principal_id: str, query: str, limit: int):
        """SELECT select_fields WHERE user_id = principal AND (f1 ILIKE q OR ...) LIMIT limit."""
        pattern = contains_pattern(query)
        columns = [getattr(self.model, f) for f in ("id", *self.select_fields)]
        matches = [
            getattr(self.model, f).ilike(pattern, escape=LIKE_ESCAPE)
            for f in self.search_fields
        ]
        return (
            select(*columns)
            .where(self.model.user_id == principal_id)
            .where(or_(*matches))
            .order_by(self.model.created_at.desc(), self.model.id)
            .limit(limit)
        )

    @traced("search.adapter")
    async def search(
        self, principal_id: str, query: str, limit: int
    ) -> list[dict[str, Any]]:
        """Return matching rows for principal_id; [] on data-source failure."""
        add_span_attributes(**{"search.category": self.name})
        stmt = self.build_statement(principal_id, query, limit)
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                rows = [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError:
            logger.exception("Error searching %s", self.name)
            return []
        logger.debug("Search %s matched %d rows", self.name, len(rows))
        return rows


def build_search_adapters(
    session_factory: async_sessionmaker[AsyncSession],
) -> list[SqlEntitySearchAdapter]:
    """Adapter registry in fixed dispatch/merge order."""

    def adapter(
        model: type[Any],
        category: SearchCategory,
        icon: str,
        search_fields: Sequence[str],
        select_fields: Sequence[str],
        sub_category: str | None = None,
    ) -> SqlEntitySearchAdapter:
        return SqlEntitySearchAdapter(
            session_factory,
            model,
            category,
            icon,
            search_fields,
            select_fields,
            sub_category=sub_category,
        )

    return [
        adapter(
            Lead,
            SearchCategory.LEADS,
            "UserPlus",
            ("name", "email", "company", "phone"),
            ("name", "email", "company", "status", "phone"),
        ),
        adapter(
            Contact,
            SearchCategory.CONTACTS,
            "Users",
            ("name", "email", "company", "phone", "position"),
            ("name", "email", "company", "phone", "position"),
        ),
        adapter(
            Campaign,
            SearchCategory.CAMPAIGNS,
            "Mail",
            ("name", "subject"),
            ("name", "subject", "status", "sent_count", "created_at"),
        ),
        adapter(
            KnowledgeNode,
            SearchCategory.KNOWLEDGE,
            "Brain",
            ("label", "description"),
            ("label", "type", "description", "tags"),
            sub_category=KnowledgeKind.NODES.value,
        ),
        adapter(
            KnowledgeMap,
            SearchCategory.KNOWLEDGE,
            "Map",
            ("name", "description"),
            ("name", "description", "created_at"),
            sub_category=KnowledgeKind.MAPS.value,
        ),
        adapter(
            KnowledgeNote,
            SearchCategory.KNOWLEDGE,
            "FileText",
            ("title", "content"),
            ("title", "content", "folder", "tags", "starred"),
            sub_category=KnowledgeKind.NOTES.value,
        ),
        adapter(
            Opportunity,
            SearchCategory.OPPORTUNITIES,
            "TrendingUp",
            ("name", "company"),
            ("name", "company", "value", "stage", "probability"),
        ),
        adapter(
            Activity,
            SearchCategory.ACTIVITIES,
            "Activity",
            ("title", "description"),
            ("title", "type", "description", "due_date", "status"),
        ),
        adapter(
            Form,
            SearchCategory.FORMS,
            "FileInput",
            ("name", "description"),
            ("name", "description", "status", "submission_count"),
        ),
    ]
