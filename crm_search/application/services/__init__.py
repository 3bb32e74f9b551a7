"""Application services: normalization, ranking and background writes."""

from crm_search.application.services.background_tasks import BackgroundTaskRunner
from crm_search.application.services.relevance_ranker import rank, relevance_key
from crm_search.application.services.result_normalizer import (
    normalize_row,
    normalize_rows,
)

__all__ = [
    "BackgroundTaskRunner",
    "normalize_row",
    "normalize_rows",
    "rank",
    "relevance_key",
]
