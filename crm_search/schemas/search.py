"""Search API schemas."""

from dataclasses import asdict
from typing import Annotated, Literal

from pydantic import Field

from crm_search.application.dtos.search import SearchResponse as SearchResponseDto
from crm_search.domain.enums import SearchCategory
from crm_search.schemas.base import CamelModel


class LeadMetadataResponse(CamelModel):
    kind: Literal["lead"] = "lead"
    status: str


class ContactMetadataResponse(CamelModel):
    kind: Literal["contact"] = "contact"
    company: str
    position: str


class CampaignMetadataResponse(CamelModel):
    kind: Literal["campaign"] = "campaign"
    status: str
    created_at: str | None = None


class KnowledgeNodeMetadataResponse(CamelModel):
    kind: Literal["knowledge_node"] = "knowledge_node"
    node_type: str
    tags: list[str] = Field(default_factory=list)


class KnowledgeMapMetadataResponse(CamelModel):
    kind: Literal["knowledge_map"] = "knowledge_map"
    created_at: str | None = None


class KnowledgeNoteMetadataResponse(CamelModel):
    kind: Literal["knowledge_note"] = "knowledge_note"
    starred: bool = False
    tags: list[str] = Field(default_factory=list)


class OpportunityMetadataResponse(CamelModel):
    kind: Literal["opportunity"] = "opportunity"
    value: float
    stage: str
    probability: int | None = None


class ActivityMetadataResponse(CamelModel):
    kind: Literal["activity"] = "activity"
    activity_type: str
    due_date: str | None = None
    status: str


class FormMetadataResponse(CamelModel):
    kind: Literal["form"] = "form"
    status: str


MetadataResponse = Annotated[
    LeadMetadataResponse
    | ContactMetadataResponse
    | CampaignMetadataResponse
    | KnowledgeNodeMetadataResponse
    | KnowledgeMapMetadataResponse
    | KnowledgeNoteMetadataResponse
    | OpportunityMetadataResponse
    | ActivityMetadataResponse
    | FormMetadataResponse,
    Field(discriminator="kind"),
]


class SearchResultResponse(CamelModel):
    """Single search hit. url is the category landing page."""

    id: str
    title: str
    subtitle: str
    description: str
    url: str
    category: SearchCategory
    icon: str
    metadata: MetadataResponse
    sub_category: str | None = None
    locked: bool | None = None
    lock_message: str | None = None


class SearchResponse(CamelModel):
    """Ranked hits plus per-category counts (capped by limit)."""

    query: str
    results: list[SearchResultResponse] = Field(default_factory=list)
    total_count: int = 0
    categories: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_dto(cls, dto: SearchResponseDto) -> "SearchResponse":
        return cls.model_validate(asdict(dto))
