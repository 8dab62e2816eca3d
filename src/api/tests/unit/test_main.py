"""Unit tests for main FastAPI application configuration."""

from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from infrastructure.version import __version__


class TestApplication:
    """Tests for the FastAPI application object."""

    def test_app_metadata(self) -> None:
        from main import app

        assert app.title == "Tenant Dispatch API"
        assert app.version == __version__

    def test_tenancy_routes_are_mounted(self) -> None:
        from main import app

        paths = {route.path for route in app.routes}

        assert "/tenants/profile" in paths
        assert "/tenants/candidates" in paths
        assert "/health" in paths


class TestLifespan:
    """Tests for the application lifespan."""

    def test_health_check(self) -> None:
        from main import app

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_lifespan_builds_tenancy_runtime_before_requests(self) -> None:
        """The registry is frozen at startup, not on the first request."""
        from main import app
        from tenancy.dependencies import _tenancy_runtime

        with TestClient(app):
            assert _tenancy_runtime.is_initialized is True

    def test_lifespan_configures_logging(self) -> None:
        from main import app

        with patch("main.configure_logging") as mock_configure:
            with TestClient(app):
                pass

        mock_configure.assert_called_once()
