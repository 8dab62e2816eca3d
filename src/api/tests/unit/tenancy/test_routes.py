"""Unit tests for Tenancy HTTP routes and their dependencies."""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.middleware.tenant_context import TenantContext
from tenancy import dependencies
from tenancy.dependencies import build_tenancy_runtime
from tenancy.presentation import routes


def _make_client(settings: TenancySettings) -> TestClient:
    runtime = build_tenancy_runtime(settings, probe=MagicMock())

    app = FastAPI()
    app.dependency_overrides[dependencies.get_tenancy_runtime] = lambda: runtime
    app.dependency_overrides[get_tenancy_settings] = lambda: settings
    app.include_router(routes.router)
    return TestClient(app)


@pytest.fixture
def test_client(tenancy_settings):
    """Create TestClient over the bundled tenants package."""
    return _make_client(tenancy_settings)


class TestTenantProfileRoute:
    """Tests for GET /tenants/profile."""

    def test_resolves_profile_for_tenant(self, test_client):
        response = test_client.get("/tenants/profile", headers={"X-Tenant-ID": "Globex"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "tenant": "Globex",
            "display_name": "Globex Corporation",
            "currency": "GBP",
            "locale": "en-GB",
        }

    def test_first_registered_candidate_wins(self, test_client):
        """'Acme' is contained in two candidate names; the first one is used."""
        response = test_client.get("/tenants/profile", headers={"X-Tenant-ID": "Acme"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["currency"] == "USD"

    def test_substring_key_selects_subsidiary(self, test_client):
        response = test_client.get("/tenants/profile", headers={"X-Tenant-ID": "Europe"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tenant"] == "AcmeEurope"

    def test_unknown_tenant_returns_404(self, test_client):
        response = test_client.get("/tenants/profile", headers={"X-Tenant-ID": "Initech"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Initech" in response.json()["detail"]

    def test_missing_header_returns_400(self, test_client):
        response = test_client.get("/tenants/profile")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "X-Tenant-ID header is required"

    def test_missing_header_uses_default_tenant(self):
        client = _make_client(
            TenancySettings(candidate_package="tenants", default_tenant_key="Globex")
        )

        response = client.get("/tenants/profile")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tenant"] == "Globex"

    def test_empty_key_returns_404_by_default(self, test_client):
        response = test_client.get("/tenants/profile", headers={"X-Tenant-ID": ""})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_empty_key_wildcard_policy_selects_first(self):
        client = _make_client(
            TenancySettings(candidate_package="tenants", empty_key_policy="wildcard")
        )

        response = client.get("/tenants/profile", headers={"X-Tenant-ID": ""})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tenant"] == "Acme"


class TestCandidatesRoute:
    """Tests for GET /tenants/candidates."""

    def test_lists_candidates_in_resolution_order(self, test_client):
        response = test_client.get("/tenants/candidates")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {
                "capability": "TenantProfileService",
                "candidates": [
                    "AcmeProfileService",
                    "AcmeEuropeProfileService",
                    "GlobexProfileService",
                ],
            }
        ]


class TestServiceScopeDependency:
    """Tests for the request-scoped service scope dependency."""

    def test_scope_is_closed_after_request(self, tenancy_settings):
        runtime = build_tenancy_runtime(tenancy_settings, probe=MagicMock())

        generator = dependencies.get_service_scope(runtime)
        scope = next(generator)
        assert scope.closed is False

        with pytest.raises(StopIteration):
            next(generator)

        assert scope.closed is True


class TestTenancyRuntime:
    """Tests for the process-wide runtime composition."""

    def test_build_reports_startup_events(self, tenancy_settings):
        probe = MagicMock()

        runtime = build_tenancy_runtime(tenancy_settings, probe=probe)

        probe.candidate_package_scanned.assert_called_once_with(
            package="tenants", type_count=3
        )
        probe.tenancy_runtime_initialized.assert_called_once_with(
            capability_count=1, candidate_count=3
        )
        assert runtime.container.is_registered(
            runtime.registry.candidates_for(dependencies.TenantProfileService)[0].concrete_type
        )

    def test_build_fails_for_missing_package(self):
        probe = MagicMock()

        with pytest.raises(ModuleNotFoundError):
            build_tenancy_runtime(
                TenancySettings(candidate_package="no_such_tenant_package"),
                probe=probe,
            )

        probe.tenancy_runtime_initialization_failed.assert_called_once()

    def test_runtime_is_built_once(self):
        first = dependencies.get_tenancy_runtime()
        second = dependencies.get_tenancy_runtime()

        assert first is second


class TestObservationContextDependency:
    """Tests for the per-request observation context."""

    def test_binds_request_id_and_tenant_source(self):
        tenant = TenantContext(tenant_key="Acme", source="default")

        context = dependencies.get_observation_context(tenant, x_request_id="req-1")

        assert context.as_dict() == {"request_id": "req-1", "tenant_source": "default"}

    def test_request_id_is_optional(self):
        tenant = TenantContext(tenant_key="Acme", source="header")

        context = dependencies.get_observation_context(tenant)

        assert context.as_dict() == {"tenant_source": "header"}
