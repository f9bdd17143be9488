"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. The database URL is optional at load time: the API and
the outbox worker raise SqlNotConfiguredException on first use when it is
missing, so tests and tooling can import the package without a database.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "caseflow"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg://... in production)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Outbox drain loop
    outbox_poller_enabled: bool = True
    outbox_poll_interval_seconds: float = 3.0
    outbox_batch_size: int = 50
    # None = retry failed events forever; otherwise dead-letter after N attempts.
    outbox_max_attempts: int | None = None
    # 0 = re-select a failed event on the next cycle; otherwise exponential backoff base.
    outbox_retry_backoff_seconds: float = 0.0
    outbox_retry_backoff_max_seconds: float = 300.0
    # How long shutdown waits for an in-flight drain before cancelling it.
    outbox_shutdown_timeout_seconds: float = 10.0

    # OpenTelemetry
    telemetry_enabled: bool = False
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
    def validate_outbox(self) -> "Settings":
        """Validate drain loop tuning values."""
        if self.outbox_poll_interval_seconds <= 0:
            raise ValueError("OUTBOX_POLL_INTERVAL_SECONDS must be greater than 0")
        if self.outbox_batch_size < 1:
            raise ValueError("OUTBOX_BATCH_SIZE must be at least 1")
        if self.outbox_max_attempts is not None and self.outbox_max_attempts < 1:
            raise ValueError(
                "OUTBOX_MAX_ATTEMPTS must be at least 1 (unset it to retry forever)"
            )
        if self.outbox_retry_backoff_seconds < 0:
            raise ValueError("OUTBOX_RETRY_BACKOFF_SECONDS must not be negative")
        if self.outbox_retry_backoff_max_seconds < self.outbox_retry_backoff_seconds:
            raise ValueError(
                "OUTBOX_RETRY_BACKOFF_MAX_SECONDS must be >= OUTBOX_RETRY_BACKOFF_SECONDS"
            )
        return self


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
