"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__
from tenancy.dependencies import get_tenancy_runtime
from tenancy.presentation import routes as tenancy_routes


@asynccontextmanager
async def tenant_dispatch_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Tenancy runtime initialization (registry frozen before first request)
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    probe = DefaultStartupProbe()

    get_tenancy_runtime()

    yield

    probe.application_shutdown()


app = FastAPI(
    title="Tenant Dispatch API",
    description="Tenant-scoped dynamic service resolution",
    version=__version__,
    lifespan=tenant_dispatch_lifespan,
)

# Include Tenancy bounded context routes
app.include_router(tenancy_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
