"""Cache key builders. Single place for key format.

Components are percent-encoded, so opaque principal ids (e.g. JWT subjects
such as ``google-oauth2:123``) never contain CACHE_KEY_SEP and cannot make
two keys collide.
"""

from urllib.parse import quote

from crm_search.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_DASHBOARD


def _encode_key_component(value: str, name: str) -> str:
    """Percent-encode one key component. Raise ValueError if it is empty."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    return quote(value, safe="")


def dashboard_tier_key(
    version: str, tier: str, principal_id: str, time_range: str
) -> str:
    """Cache key for one dashboard tier: dashboard:<version>:<tier>:<principal>:<range>."""
    return CACHE_KEY_SEP.join(
        [
            CACHE_PREFIX_DASHBOARD,
            _encode_key_component(version, "version"),
            _encode_key_component(tier, "tier"),
            _encode_key_component(principal_id, "principal_id"),
            _encode_key_component(time_range, "time_range"),
        ]
    )
