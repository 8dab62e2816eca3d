"""Integration test fixtures.

Integration tests drive the full application through its lifespan, so
the tenancy runtime is built from the real settings and the bundled
tenants package.
"""

import pytest

from tenancy.dependencies import reset_tenancy_runtime


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (exercises the full application)",
    )


@pytest.fixture(autouse=True)
def fresh_tenancy_runtime():
    """Ensure each test observes a runtime built by its own lifespan."""
    reset_tenancy_runtime()
    yield
    reset_tenancy_runtime()
