"""DTOs for federated search results (no dependency on ORM).

Metadata is a tagged union: one frozen dataclass per category variant,
discriminated by ``kind``. The ranker never reads metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from crm_search.domain.enums import SearchCategory


@dataclass(frozen=True)
class LeadMetadata:
    status: str
    kind: Literal["lead"] = "lead"


@dataclass(frozen=True)
class ContactMetadata:
    company: str
    position: str
    kind: Literal["contact"] = "contact"


@dataclass(frozen=True)
class CampaignMetadata:
    status: str
    created_at: str | None
    kind: Literal["campaign"] = "campaign"


@dataclass(frozen=True)
class KnowledgeNodeMetadata:
    node_type: str
    tags: tuple[str, ...]
    kind: Literal["knowledge_node"] = "knowledge_node"


@dataclass(frozen=True)
class KnowledgeMapMetadata:
    created_at: str | None
    kind: Literal["knowledge_map"] = "knowledge_map"


@dataclass(frozen=True)
class KnowledgeNoteMetadata:
    starred: bool
    tags: tuple[str, ...]
    kind: Literal["knowledge_note"] = "knowledge_note"


@dataclass(frozen=True)
class OpportunityMetadata:
    value: float
    stage: str
    probability: int | None
    kind: Literal["opportunity"] = "opportunity"


@dataclass(frozen=True)
class ActivityMetadata:
    activity_type: str
    due_date: str | None
    status: str
    kind: Literal["activity"] = "activity"


@dataclass(frozen=True)
class FormMetadata:
    status: str
    kind: Literal["form"] = "form"


ResultMetadata = (
    LeadMetadata
    | ContactMetadata
    | CampaignMetadata
    | KnowledgeNodeMetadata
    | KnowledgeMapMetadata
    | KnowledgeNoteMetadata
    | OpportunityMetadata
    | ActivityMetadata
    | FormMetadata
)


@dataclass(frozen=True)
class SearchResult:
    """Single normalized hit. id, title, category and url are never empty."""

    id: str
    title: str
    subtitle: str
    description: str
    url: str  # Category landing page, not a deep link
    category: SearchCategory
    icon: str
    metadata: ResultMetadata
    sub_category: str | None = None
    locked: bool | None = None
    lock_message: str | None = None


@dataclass(frozen=True)
class SearchResponse:
    """Ranked results plus per-category counts.

    categories counts the results shown per category, so a count never
    exceeds the per-category limit (not a true total).
    """

    query: str
    results: list[SearchResult] = field(default_factory=list)
    total_count: int = 0
    categories: dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls, query: str) -> "SearchResponse":
        """Response for a non-search (query too short)."""
        return cls(query=query)
