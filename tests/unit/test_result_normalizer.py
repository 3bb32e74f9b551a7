"""Result normalizer: per-category projections, locking and missing fields."""

from datetime import datetime, timezone

import pytest

from crm_search.application.dtos.search import (
    ActivityMetadata,
    CampaignMetadata,
    ContactMetadata,
    KnowledgeNoteMetadata,
    LeadMetadata,
    OpportunityMetadata,
)
from crm_search.application.services.result_normalizer import (
    LOCK_MESSAGES,
    normalize_row,
    normalize_rows,
)
from crm_search.domain.enums import KnowledgeKind, SearchCategory


def test_lead_prefers_email_then_company() -> None:
    row = {"id": "l1", "name": "Acme", "email": "", "company": "Acme Inc", "phone": "555", "status": "NEW"}
    result = normalize_row(row, SearchCategory.LEADS, "UserPlus")
    assert result is not None
    assert result.title == "Acme"
    assert result.subtitle == "Acme Inc"
    assert result.description == "555"
    assert result.url == "/app/leads"
    assert result.metadata == LeadMetadata(status="NEW")
    assert result.locked is None


def test_contact_with_all_optional_fields_missing() -> None:
    result = normalize_row({"id": "c1", "name": "Jane"}, SearchCategory.CONTACTS, "Users")
    assert result is not None
    assert result.subtitle == ""
    assert result.description == ""
    assert result.metadata == ContactMetadata(company="", position="")


def test_campaign_description_and_created_at() -> None:
    created = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)
    row = {"id": "k1", "name": "Q3", "subject": "Hello", "status": "active", "sent_count": 42, "created_at": created}
    result = normalize_row(row, SearchCategory.CAMPAIGNS, "Mail")
    assert result.subtitle == "Hello"
    assert result.description == "active • 42 sent"
    assert result.metadata == CampaignMetadata(status="active", created_at=created.isoformat())


def test_opportunity_value_formatting() -> None:
    row = {"id": "o1", "name": "Renewal", "company": "Acme", "value": 1500.0, "stage": "negotiation", "probability": 60}
    result = normalize_row(row, SearchCategory.OPPORTUNITIES, "TrendingUp")
    assert result.description == "$1500 • negotiation"
    assert result.metadata == OpportunityMetadata(value=1500.0, stage="negotiation", probability=60)


def test_opportunity_without_value() -> None:
    result = normalize_row({"id": "o2", "name": "Pilot"}, SearchCategory.OPPORTUNITIES, "TrendingUp")
    assert result.description == "$0 • "
    assert result.metadata.probability is None


def test_activity_uses_title_and_type() -> None:
    row = {"id": "a1", "title": "Call Acme", "type": "call", "description": "renewal", "status": "open"}
    result = normalize_row(row, SearchCategory.ACTIVITIES, "Activity")
    assert result.title == "Call Acme"
    assert result.subtitle == "call"
    assert result.metadata == ActivityMetadata(activity_type="call", due_date=None, status="open")


def test_form_description_counts_submissions() -> None:
    result = normalize_row({"id": "f1", "name": "Demo", "status": "published"}, SearchCategory.FORMS, "FileInput")
    assert result.subtitle == "Form"
    assert result.description == "0 submissions"


@pytest.mark.parametrize("kind", list(KnowledgeKind))
def test_knowledge_results_are_locked(kind: KnowledgeKind) -> None:
    row = {"id": "n1", "label": "Idea", "name": "Idea", "title": "Idea"}
    result = normalize_row(row, SearchCategory.KNOWLEDGE, "Brain", kind.value)
    assert result.locked is True
    assert result.lock_message == LOCK_MESSAGES[kind.value]
    assert result.sub_category == kind.value
    assert result.url == "/app/second-brain"


def test_note_excerpt_and_folder_default() -> None:
    row = {"id": "n2", "title": "Notes", "content": "x" * 250, "starred": 1, "tags": ["a", None, "b"]}
    result = normalize_row(row, SearchCategory.KNOWLEDGE, "FileText", KnowledgeKind.NOTES.value)
    assert result.subtitle == "Note"
    assert len(result.description) == 100
    assert result.metadata == KnowledgeNoteMetadata(starred=True, tags=("a", "b"))


def test_missing_title_falls_back_to_id() -> None:
    result = normalize_row({"id": "l9", "name": None}, SearchCategory.LEADS, "UserPlus")
    assert result.title == "l9"


def test_rows_without_id_are_dropped() -> None:
    rows = [{"name": "no id"}, {"id": "l1", "name": "kept"}]
    results = normalize_rows(rows, SearchCategory.LEADS, "UserPlus")
    assert [r.id for r in results] == ["l1"]


def test_normalization_is_deterministic() -> None:
    row = {"id": "l1", "name": "Acme", "email": "a@acme.test", "status": "NEW"}
    assert normalize_row(row, SearchCategory.LEADS, "UserPlus") == normalize_row(
        dict(row), SearchCategory.LEADS, "UserPlus"
    )


def test_unknown_projection_is_dropped() -> None:
    assert normalize_row({"id": "x"}, SearchCategory.LEADS, "UserPlus", "nodes") is None
    assert normalize_rows([{"id": "x"}], SearchCategory.KNOWLEDGE, "Brain") == []
