"""Unit test fixtures with mocked dependencies."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_scope_probe():
    """Provide a mocked ServiceScopeProbe."""
    return MagicMock()


@pytest.fixture
def container(mock_scope_probe):
    """Provide an empty ServiceContainer with a mocked probe."""
    from infrastructure.services import ServiceContainer

    return ServiceContainer(probe=mock_scope_probe)


@pytest.fixture
def mock_registry_probe():
    """Provide a mocked CandidateRegistryProbe."""
    return MagicMock()


@pytest.fixture
def mock_resolver_probe():
    """Provide a mocked TenantResolverProbe."""
    return MagicMock()


@pytest.fixture
def tenancy_settings():
    """Provide tenancy settings pointing at the bundled tenants package."""
    from infrastructure.settings import TenancySettings

    return TenancySettings(
        candidate_package="tenants",
        empty_key_policy="not_found",
        default_tenant_key=None,
    )


@pytest.fixture(autouse=True)
def reset_tenancy_runtime():
    """Discard the process-wide tenancy runtime between tests."""
    from tenancy.dependencies import reset_tenancy_runtime as _reset

    _reset()
    yield
    _reset()
