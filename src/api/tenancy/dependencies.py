"""Dependency injection for Tenancy bounded context.

Composes the process-wide tenancy runtime (service container plus frozen
candidate registry) and exposes request-scoped FastAPI dependencies such as the service scope and the
tenant resolver, plus tenant services resolved per request.

Usage in FastAPI routes:
    @router.get("/example")
    def example(
        service: Annotated[TenantProfileService, Depends(get_tenant_profile_service)],
    ):
        ...
"""

from collections.abc import Generator
from dataclasses import dataclass
from typing import Annotated, Callable, TypeVar

from fastapi import Depends, Header, HTTPException, status

from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.services import ServiceContainer, ServiceScope
from infrastructure.settings import TenancySettings, get_tenancy_settings
from shared_kernel.lazy_initializer import LazyInitializer
from shared_kernel.middleware.observability import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.middleware.tenant_context import TenantContext
from shared_kernel.observability_context import ObservationContext
from tenancy.application import (
    CandidateRegistry,
    CandidateRegistryBuilder,
    TenantResolver,
    add_scoped_dynamic,
)
from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.domain.value_objects import EmptyTenantKeyPolicy
from tenancy.infrastructure import scan_candidate_types
from tenancy.ports.capabilities import TenantProfileService
from tenancy.ports.exceptions import TenantImplementationNotFoundError

T = TypeVar("T")

# Capabilities dispatched per tenant, all discovered in the candidate package.
TENANT_CAPABILITIES: tuple[type, ...] = (TenantProfileService,)


@dataclass(frozen=True)
class TenancyRuntime:
    """Process-wide tenancy objects, built once at startup.

    Attributes:
        container: Lifecycle manager holding the scoped candidate services.
        registry: Frozen capability -> candidates mapping.
    """

    container: ServiceContainer
    registry: CandidateRegistry


def build_tenancy_runtime(
    settings: TenancySettings,
    capabilities: tuple[type, ...] = TENANT_CAPABILITIES,
    probe: StartupProbe | None = None,
) -> TenancyRuntime:
    """Scan the candidate package and register every tenant capability.

    Args:
        settings: Tenancy settings naming the candidate package.
        capabilities: Capabilities to make resolvable per tenant.
        probe: Optional startup probe.

    Returns:
        A TenancyRuntime with a frozen registry.
    """
    probe = probe or DefaultStartupProbe()
    try:
        pool = scan_candidate_types(settings.candidate_package)
    except ImportError as e:
        probe.tenancy_runtime_initialization_failed(error=e)
        raise
    probe.candidate_package_scanned(
        package=settings.candidate_package, type_count=len(pool)
    )

    container = ServiceContainer()
    builder = CandidateRegistryBuilder()
    for capability in capabilities:
        add_scoped_dynamic(container, builder, capability, pool)
    registry = builder.build()

    probe.tenancy_runtime_initialized(
        capability_count=len(registry),
        candidate_count=registry.candidate_count,
    )
    return TenancyRuntime(container=container, registry=registry)


_tenancy_runtime: LazyInitializer[TenancyRuntime] = LazyInitializer(
    lambda: build_tenancy_runtime(get_tenancy_settings())
)


def get_tenancy_runtime() -> TenancyRuntime:
    """Get the application-scoped tenancy runtime (built once).

    Safe to call from concurrent first requests; the runtime is built
    exactly once and shared by all callers.
    """
    return _tenancy_runtime.get()


def reset_tenancy_runtime() -> None:
    """Drop the built runtime so the next request rebuilds it (tests only)."""
    _tenancy_runtime.reset()


def get_candidate_registry(
    runtime: Annotated[TenancyRuntime, Depends(get_tenancy_runtime)],
) -> CandidateRegistry:
    """Get the frozen candidate registry."""
    return runtime.registry


def get_service_scope(
    runtime: Annotated[TenancyRuntime, Depends(get_tenancy_runtime)],
) -> Generator[ServiceScope, None, None]:
    """Get request-scoped service scope.

    Each request gets its own scope; instances resolved through it are
    closed when the request completes.

    Yields:
        An open ServiceScope
    """
    with runtime.container.create_scope() as scope:
        yield scope


def get_tenant_context_probe() -> TenantContextProbe:
    """Get TenantContextProbe instance."""
    return DefaultTenantContextProbe()


def get_tenant_resolver_probe() -> TenantResolverProbe:
    """Get TenantResolverProbe instance."""
    return DefaultTenantResolverProbe()


def get_tenant_context(
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    probe: Annotated[TenantContextProbe, Depends(get_tenant_context_probe)],
    x_tenant_id: Annotated[str | None, Header()] = None,
) -> TenantContext:
    """Get the tenant context from the X-Tenant-ID header.

    An empty header value is passed through as the literal empty key;
    how it resolves is decided by the empty-key policy.

    Raises:
        HTTPException 400: If the header is missing and no default tenant
            key is configured.
    """
    if x_tenant_id is not None:
        probe.tenant_resolved_from_header(tenant_key=x_tenant_id)
        return TenantContext(tenant_key=x_tenant_id, source="header")

    if settings.default_tenant_key is not None:
        probe.tenant_resolved_from_default(tenant_key=settings.default_tenant_key)
        return TenantContext(tenant_key=settings.default_tenant_key, source="default")

    probe.tenant_header_missing()
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="X-Tenant-ID header is required",
    )


def get_observation_context(
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
    x_request_id: Annotated[str | None, Header()] = None,
) -> ObservationContext:
    """Get the observation context bound to every probe of the request."""
    return ObservationContext(request_id=x_request_id, tenant_source=tenant.source)


def get_tenant_resolver(
    scope: Annotated[ServiceScope, Depends(get_service_scope)],
    registry: Annotated[CandidateRegistry, Depends(get_candidate_registry)],
    settings: Annotated[TenancySettings, Depends(get_tenancy_settings)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
    probe: Annotated[TenantResolverProbe, Depends(get_tenant_resolver_probe)],
) -> TenantResolver:
    """Get a TenantResolver bound to the request's service scope."""
    return TenantResolver(
        registry=registry,
        provider=scope,
        empty_key_policy=EmptyTenantKeyPolicy(settings.empty_key_policy),
        probe=probe.with_context(context),
    )


def require_tenant_service(capability: type[T]) -> Callable[..., T]:
    """Build a dependency resolving capability for the request's tenant.

    Args:
        capability: A capability registered at startup.

    Returns:
        A FastAPI dependency returning the tenant's implementation.
        It raises HTTPException 404 when no implementation is registered
        for the tenant.
    """

    def dependency(
        tenant: Annotated[TenantContext, Depends(get_tenant_context)],
        resolver: Annotated[TenantResolver, Depends(get_tenant_resolver)],
    ) -> T:
        try:
            return resolver.resolve(capability, tenant.tenant_key)
        except TenantImplementationNotFoundError as e:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(e),
            ) from e

    dependency.__name__ = f"get_{capability.__name__}"
    return dependency


get_tenant_profile_service = require_tenant_service(TenantProfileService)
