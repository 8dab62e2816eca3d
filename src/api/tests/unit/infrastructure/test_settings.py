"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    Settings,
    TenancySettings,
    get_settings,
    get_tenancy_settings,
)


class TestTenancySettings:
    """Tests for tenant resolution configuration."""

    def test_defaults(self, monkeypatch):
        """Should scan the bundled package and reject empty keys by default."""
        for name in ("CANDIDATE_PACKAGE", "EMPTY_KEY_POLICY", "DEFAULT_TENANT_KEY"):
            monkeypatch.delenv(f"TENANT_DISPATCH_TENANCY_{name}", raising=False)

        settings = TenancySettings(_env_file=None)

        assert settings.candidate_package == "tenants"
        assert settings.empty_key_policy == "not_found"
        assert settings.default_tenant_key is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TENANT_DISPATCH_TENANCY_CANDIDATE_PACKAGE", "acme_tenants")
        monkeypatch.setenv("TENANT_DISPATCH_TENANCY_EMPTY_KEY_POLICY", "wildcard")
        monkeypatch.setenv("TENANT_DISPATCH_TENANCY_DEFAULT_TENANT_KEY", "Acme")

        settings = TenancySettings(_env_file=None)

        assert settings.candidate_package == "acme_tenants"
        assert settings.empty_key_policy == "wildcard"
        assert settings.default_tenant_key == "Acme"

    def test_unknown_empty_key_policy_is_rejected(self):
        with pytest.raises(ValidationError):
            TenancySettings(empty_key_policy="first")

    def test_candidate_package_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            TenancySettings(candidate_package="")


class TestSettings:
    """Tests for application settings."""

    def test_log_level_is_normalized(self):
        settings = Settings(log_level=" DEBUG ")

        assert settings.log_level == "debug"

    def test_invalid_log_level_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(log_level="verbose")

        assert "log_level" in str(exc_info.value)

    def test_tenancy_section(self):
        assert Settings().tenancy is get_tenancy_settings()


class TestCachedGetters:
    """Tests for the lru_cache settings getters."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_get_tenancy_settings_is_cached(self):
        assert get_tenancy_settings() is get_tenancy_settings()
