"""Domain probe for tenant context extraction.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to reading the tenant key from the
X-Tenant-ID request header.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantContextProbe(Protocol):
    """Domain probe for tenant context extraction operations."""

    def tenant_resolved_from_header(self, tenant_key: str) -> None:
        """Record that the tenant key was read from the X-Tenant-ID header."""
        ...

    def tenant_resolved_from_default(self, tenant_key: str) -> None:
        """Record that the configured default tenant key was used."""
        ...

    def tenant_header_missing(self) -> None:
        """Record that the X-Tenant-ID header was missing and no default exists."""
        ...

    def with_context(self, context: ObservationContext) -> TenantContextProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantContextProbe:
    """Default implementation of TenantContextProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTenantContextProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantContextProbe(logger=self._logger, context=context)

    def tenant_resolved_from_header(self, tenant_key: str) -> None:
        """Record that the tenant key was read from the X-Tenant-ID header."""
        self._logger.debug(
            "tenant_context_resolved_from_header",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def tenant_resolved_from_default(self, tenant_key: str) -> None:
        """Record that the configured default tenant key was used."""
        self._logger.debug(
            "tenant_context_resolved_from_default",
            tenant_key=tenant_key,
            **self._get_context_kwargs(),
        )

    def tenant_header_missing(self) -> None:
        """Record that the X-Tenant-ID header was missing and no default exists."""
        self._logger.warning(
            "tenant_context_header_missing",
            message="X-Tenant-ID header is required when no default tenant is configured",
            **self._get_context_kwargs(),
        )
