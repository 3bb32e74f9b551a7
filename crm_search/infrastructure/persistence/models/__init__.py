"""ORM models for the CRM tables read by search and the dashboard."""

from crm_search.infrastructure.persistence.models.activity import Activity
from crm_search.infrastructure.persistence.models.campaign import Campaign
from crm_search.infrastructure.persistence.models.contact import Contact
from crm_search.infrastructure.persistence.models.deal import Deal
from crm_search.infrastructure.persistence.models.form import Form, FormSubmission
from crm_search.infrastructure.persistence.models.knowledge import (
    KnowledgeMap,
    KnowledgeNode,
    KnowledgeNote,
)
from crm_search.infrastructure.persistence.models.lead import Lead
from crm_search.infrastructure.persistence.models.opportunity import Opportunity

__all__ = [
    "Activity",
    "Campaign",
    "Contact",
    "Deal",
    "Form",
    "FormSubmission",
    "KnowledgeMap",
    "KnowledgeNode",
    "KnowledgeNote",
    "Lead",
    "Opportunity",
]
