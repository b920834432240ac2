"""Application configuration management via pydantic-settings.

Centralize all configuration parameters for the exporter. Load settings from
environment variables and/or a `.env` file. Provide type validation, default
values, and construction of the probed status URL. The CLI layer overrides
individual fields by passing keyword arguments to `Settings`.
"""

from functools import lru_cache
from typing import Literal

from pydantic import (
    AliasChoices,
    Field,
    computed_field,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from atlassian_status_exporter import __version__
from atlassian_status_exporter.core.types import DEFAULT_MAX_BODY_BYTES, ProbeTarget


class Settings(BaseSettings):
    """Application-wide configuration settings.

    Attributes:
        PROJECT_NAME: Display name for the application.
        VERSION: Semantic version string.
        ENVIRONMENT: Deployment environment identifier.
        LOG_LEVEL: Minimum logging verbosity level.
        DEBUG: Force debug-level logging regardless of LOG_LEVEL.
        ENABLE_COLOR_LOGS: Colorize console log output in development.
        SVC_ADDRESS: Address the metrics server listens on.
        SVC_PORT: Port the metrics server listens on.
        SVC_TIMEOUT: Seconds allowed for one probe of the status endpoint.
        APP_URL: Host of the monitored application (e.g. jira.example.com).
        APP_PROTOCOL: Scheme used to reach the monitored application.
        METRICS_NAMESPACE: Prefix for every exported metric name.
        VERIFY_SSL: Verify TLS certificates of the monitored application.
        MAX_BODY_BYTES: Largest /status body read per scrape.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # PROJECT METADATA
    # ==========================================================================
    PROJECT_NAME: str = "Atlassian Status Exporter"
    VERSION: str = __version__

    # ==========================================================================
    # ENVIRONMENT & LOGGING
    # ==========================================================================
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: Literal["debug", "info", "warning", "error", "critical"] = "info"
    DEBUG: bool = False
    ENABLE_COLOR_LOGS: bool = False
    LOGGING_NOISY_MODULES: list[str] = [
        "uvicorn.access",
        "uvicorn.error",
        "httpx",
        "httpcore",
        "asyncio",
    ]

    # ==========================================================================
    # METRICS SERVER
    # ==========================================================================
    SVC_ADDRESS: str = "0.0.0.0"
    SVC_PORT: int = Field(default=9997, ge=1, le=65535)
    # Prometheus scrapes time out after 10 seconds by default.
    SVC_TIMEOUT: float = Field(default=10.0, gt=0)

    # ==========================================================================
    # MONITORED APPLICATION
    # ==========================================================================
    APP_URL: str
    APP_PROTOCOL: Literal["http", "https"] = Field(
        default="https",
        validation_alias=AliasChoices("APP_PROTOCOL", "APP_PROTOCAL"),
    )
    METRICS_NAMESPACE: str = Field(default="atlassian_status", pattern=r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
    VERIFY_SSL: bool = True
    MAX_BODY_BYTES: int = Field(default=DEFAULT_MAX_BODY_BYTES, gt=0)

    @field_validator("APP_URL")
    @classmethod
    def validate_app_url(cls, v: str) -> str:
        """Normalize the monitored host and reject unusable values.

        Args:
            v: Raw host value, e.g. ``confluence.example.com``.

        Returns:
            The host without surrounding whitespace or trailing slashes.

        Raises:
            ValueError: If the host is blank or already carries a scheme.
        """
        host = v.strip().rstrip("/")
        if not host:
            raise ValueError("APP_URL must name the application host")
        if "://" in host:
            raise ValueError(
                "APP_URL must be a bare host (ie. jira.domain.com); set APP_PROTOCOL for the scheme"
            )
        return host

    @computed_field
    @property
    def STATUS_URL(self) -> str:
        """Full URL of the application's health-check endpoint."""
        return f"{self.APP_PROTOCOL}://{self.APP_URL}/status"

    @property
    def effective_log_level(self) -> str:
        return "debug" if self.DEBUG else self.LOG_LEVEL

    def probe_target(self) -> ProbeTarget:
        """Build the immutable probe target handed to the status translator."""
        return ProbeTarget(
            url=self.STATUS_URL,
            host=self.APP_URL,
            timeout=self.SVC_TIMEOUT,
            max_body_bytes=self.MAX_BODY_BYTES,
        )


# ==============================================================================
# DEPENDENCY INJECTION
# ==============================================================================


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton instance of the application settings.

    Returns:
        The singleton Settings instance.

    Raises:
        pydantic.ValidationError: If APP_URL is missing or any value is invalid.
    """
    return Settings()
