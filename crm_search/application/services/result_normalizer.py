"""Map raw entity rows onto the common SearchResult shape.

Pure and total: no I/O, never raises for missing or null fields. Missing
optional text becomes "". Rows without an id, or for a category with no
registered projection, are dropped; a missing title falls back to the id
so the non-empty invariant holds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from crm_search.application.dtos.search import (
    ActivityMetadata,
    CampaignMetadata,
    ContactMetadata,
    FormMetadata,
    KnowledgeMapMetadata,
    KnowledgeNodeMetadata,
    KnowledgeNoteMetadata,
    LeadMetadata,
    OpportunityMetadata,
    SearchResult,
)
from crm_search.core.constants import NOTE_EXCERPT_LENGTH
from crm_search.domain.enums import KnowledgeKind, SearchCategory

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]

CATEGORY_URLS: dict[SearchCategory, str] = {
    SearchCategory.LEADS: "/app/leads",
    SearchCategory.CONTACTS: "/app/contacts",
    SearchCategory.CAMPAIGNS: "/app/email-marketing",
    SearchCategory.KNOWLEDGE: "/app/second-brain",
    SearchCategory.OPPORTUNITIES: "/app/opportunities",
    SearchCategory.ACTIVITIES: "/app/activities",
    SearchCategory.FORMS: "/app/forms",
}

LOCK_MESSAGES: dict[str, str] = {
    KnowledgeKind.NODES.value: "Coming in V1.2 - Second Brain with AI-powered knowledge management",
    KnowledgeKind.MAPS.value: "Coming in V1.2 - Mind Maps for visual planning",
    KnowledgeKind.NOTES.value: "Coming in V1.2 - Advanced note-taking with AI",
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _first(row: Row, *keys: str) -> str:
    """Return the first non-empty text among keys."""
    for key in keys:
        value = _text(row.get(key))
        if value:
            return value
    return ""


def _iso(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _format_number(value: Any) -> str:
    """Render 1500.0 as '1500' and 1500.5 as '1500.5'."""
    number = _number(value)
    if number.is_integer():
        return str(int(number))
    return str(number)


def _count(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _tags(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Iterable):
        return tuple(str(tag) for tag in value if tag is not None)
    return ()


def _probability(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return int(value)
    return None


# Per-category projections: row -> (subtitle, description, metadata)
Projection = Callable[[Row], tuple[str, str, Any]]


def _project_lead(row: Row) -> tuple[str, str, Any]:
    return (
        _first(row, "email", "company"),
        _text(row.get("phone")),
        LeadMetadata(status=_text(row.get("status"))),
    )


def _project_contact(row: Row) -> tuple[str, str, Any]:
    return (
        _first(row, "email", "company"),
        _text(row.get("phone")),
        ContactMetadata(
            company=_text(row.get("company")),
            position=_text(row.get("position")),
        ),
    )


def _project_campaign(row: Row) -> tuple[str, str, Any]:
    status = _text(row.get("status"))
    return (
        _text(row.get("subject")),
        f"{status} • {_count(row.get('sent_count'))} sent",
        CampaignMetadata(status=status, created_at=_iso(row.get("created_at"))),
    )


def _project_knowledge_node(row: Row) -> tuple[str, str, Any]:
    node_type = _text(row.get("type"))
    return (
        f"{node_type} node",
        _text(row.get("description")),
        KnowledgeNodeMetadata(node_type=node_type, tags=_tags(row.get("tags"))),
    )


def _project_knowledge_map(row: Row) -> tuple[str, str, Any]:
    return (
        "Map",
        _text(row.get("description")),
        KnowledgeMapMetadata(created_at=_iso(row.get("created_at"))),
    )


def _project_knowledge_note(row: Row) -> tuple[str, str, Any]:
    return (
        _first(row, "folder") or "Note",
        _text(row.get("content"))[:NOTE_EXCERPT_LENGTH],
        KnowledgeNoteMetadata(
            starred=bool(row.get("starred")), tags=_tags(row.get("tags"))
        ),
    )


def _project_opportunity(row: Row) -> tuple[str, str, Any]:
    stage = _text(row.get("stage"))
    return (
        _text(row.get("company")),
        f"${_format_number(row.get('value'))} • {stage}",
        OpportunityMetadata(
            value=_number(row.get("value")),
            stage=stage,
            probability=_probability(row.get("probability")),
        ),
    )


def _project_activity(row: Row) -> tuple[str, str, Any]:
    activity_type = _text(row.get("type"))
    return (
        activity_type,
        _text(row.get("description")),
        ActivityMetadata(
            activity_type=activity_type,
            due_date=_iso(row.get("due_date")),
            status=_text(row.get("status")),
        ),
    )


def _project_form(row: Row) -> tuple[str, str, Any]:
    return (
        "Form",
        f"{_count(row.get('submission_count'))} submissions",
        FormMetadata(status=_text(row.get("status"))),
    )


_PROJECTIONS: dict[tuple[SearchCategory, str | None], Projection] = {
    (SearchCategory.LEADS, None): _project_lead,
    (SearchCategory.CONTACTS, None): _project_contact,
    (SearchCategory.CAMPAIGNS, None): _project_campaign,
    (SearchCategory.KNOWLEDGE, KnowledgeKind.NODES.value): _project_knowledge_node,
    (SearchCategory.KNOWLEDGE, KnowledgeKind.MAPS.value): _project_knowledge_map,
    (SearchCategory.KNOWLEDGE, KnowledgeKind.NOTES.value): _project_knowledge_note,
    (SearchCategory.OPPORTUNITIES, None): _project_opportunity,
    (SearchCategory.ACTIVITIES, None): _project_activity,
    (SearchCategory.FORMS, None): _project_form,
}

# Title column per projection; everything else is handled in the projection.
_TITLE_KEYS: dict[tuple[SearchCategory, str | None], tuple[str, ...]] = {
    (SearchCategory.KNOWLEDGE, KnowledgeKind.NODES.value): ("label",),
    (SearchCategory.KNOWLEDGE, KnowledgeKind.NOTES.value): ("title",),
    (SearchCategory.ACTIVITIES, None): ("title",),
}


def normalize_row(
    row: Row,
    category: SearchCategory,
    icon: str,
    sub_category: str | None = None,
) -> SearchResult | None:
    """Normalize one raw row; return None when the row has no id or no projection."""
    key = (category, sub_category)
    projection = _PROJECTIONS.get(key)
    if projection is None:
        logger.warning(
            "No projection for category=%s sub_category=%s; dropping row",
            category.value,
            sub_category,
        )
        return None
    row_id = _text(row.get("id"))
    if not row_id:
        logger.debug("Dropping %s row without id", category.value)
        return None
    title = _first(row, *_TITLE_KEYS.get(key, ("name",))) or row_id
    subtitle, description, metadata = projection(row)
    locked = category is SearchCategory.KNOWLEDGE
    return SearchResult(
        id=row_id,
        title=title,
        subtitle=subtitle,
        description=description,
        url=CATEGORY_URLS[category],
        category=category,
        icon=icon,
        metadata=metadata,
        sub_category=sub_category,
        locked=True if locked else None,
        lock_message=LOCK_MESSAGES.get(sub_category or "") if locked else None,
    )


def normalize_rows(
    rows: Iterable[Row],
    category: SearchCategory,
    icon: str,
    sub_category: str | None = None,
) -> list[SearchResult]:
    """Normalize raw adapter rows into SearchResults, preserving row order."""
    results: list[SearchResult] = []
    for row in rows:
        result = normalize_row(row, category, icon, sub_category)
        if result is not None:
            results.append(result)
    return results
