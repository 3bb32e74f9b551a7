"""Shared utilities: UTC datetimes and ID generation."""

from crm_search.shared.utils.datetime import start_of_utc_day, utc_now
from crm_search.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid", "start_of_utc_day", "utc_now"]
