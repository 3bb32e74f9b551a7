"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required (secret_key, and sane search/cache bounds).
    """

    # App
    app_name: str = "crm-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (read-only consumer of the CRM tables)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security: bearer tokens are issued by the identity provider and verified here.
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 30
    request_id_header: str = "X-Request-ID"

    # Rate limits (SlowAPI limit strings)
    search_rate_limit: str = "60/minute"
    dashboard_rate_limit: str = "120/minute"

    # Search
    search_min_query_length: int = 2
    search_default_limit: int = 5
    search_max_limit: int = 50

    # Redis Cache
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

    # Dashboard tier TTLs (seconds) and key version tag
    cache_ttl_realtime: int = 30
    cache_ttl_hourly: int = 3600
    cache_ttl_daily: int = 86400
    dashboard_cache_version: str = "v1"

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env and numeric bounds."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required to verify bearer tokens. "
                "Use the same value as the identity provider that issues them."
            )
        if self.search_min_query_length < 1:
            raise ValueError("search_min_query_length must be at least 1")
        if not 1 <= self.search_default_limit <= self.search_max_limit:
            raise ValueError(
                "search_default_limit must be between 1 and search_max_limit "
                f"(got {self.search_default_limit}, max {self.search_max_limit})"
            )
        for name in ("cache_ttl_realtime", "cache_ttl_hourly", "cache_ttl_daily"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be a positive number of seconds")
        return self

    def tier_ttls(self) -> dict[str, int]:
        """Return TTL in seconds keyed by tier value (realtime, hourly, daily)."""
        return {
            "realtime": self.cache_ttl_realtime,
            "hourly": self.cache_ttl_hourly,
            "daily": self.cache_ttl_daily,
        }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
