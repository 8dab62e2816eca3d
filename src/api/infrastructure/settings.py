"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


class TenancySettings(BaseSettings):
    """Tenant-scoped service resolution settings.

    Environment variables:
        TENANT_DISPATCH_TENANCY_CANDIDATE_PACKAGE: Package scanned for tenant
            implementations (default: tenants)
        TENANT_DISPATCH_TENANCY_EMPTY_KEY_POLICY: How an empty tenant key is
            resolved - 'not_found' rejects it, 'wildcard' selects the first
            candidate (default: not_found)
        TENANT_DISPATCH_TENANCY_DEFAULT_TENANT_KEY: Tenant key used when the
            X-Tenant-ID header is absent (default: unset, header required)
    """

    model_config = SettingsConfigDict(
        env_prefix="TENANT_DISPATCH_TENANCY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    candidate_package: str = Field(
        default="tenants",
        description="Importable package whose modules hold tenant implementations",
        min_length=1,
    )
    empty_key_policy: Literal["not_found", "wildcard"] = Field(
        default="not_found",
        description="Resolution behavior for an empty tenant key",
    )
    default_tenant_key: str | None = Field(
        default=None,
        description="Fallback tenant key when X-Tenant-ID is missing",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="TENANT_DISPATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Tenant Dispatch API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="info", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        normalized = value.strip().lower()
        if normalized not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(_LOG_LEVELS)}, got '{value}'"
            )
        return normalized

    @property
    def tenancy(self) -> TenancySettings:
        """Get tenancy settings."""
        return get_tenancy_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return TenancySettings()
