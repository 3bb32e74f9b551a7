"""Application DTOs (plain dataclasses; no ORM or pydantic)."""

from crm_search.application.dtos.dashboard import (
    DashboardSummary,
    TierPayload,
    empty_tier_payload,
    merge_tier_payloads,
)
from crm_search.application.dtos.principal import Principal
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
    ResultMetadata,
    SearchResponse,
    SearchResult,
)

__all__ = [
    "ActivityMetadata",
    "CampaignMetadata",
    "ContactMetadata",
    "DashboardSummary",
    "FormMetadata",
    "KnowledgeMapMetadata",
    "KnowledgeNodeMetadata",
    "KnowledgeNoteMetadata",
    "LeadMetadata",
    "OpportunityMetadata",
    "Principal",
    "ResultMetadata",
    "SearchResponse",
    "SearchResult",
    "TierPayload",
    "empty_tier_payload",
    "merge_tier_payloads",
]
