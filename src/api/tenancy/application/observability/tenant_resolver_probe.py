"""Domain probe for tenant-scoped service resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events when a tenant key is mapped to a concrete
implementation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantResolverProbe(Protocol):
    """Domain probe for tenant resolution operations."""

    def tenant_resolved(
        self, capability: str, tenant_key: str, implementation: str
    ) -> None:
        """Record that a tenant key resolved to an implementation."""
        ...

    def tenant_not_found(
        self, capability: str, tenant_key: str, candidate_count: int
    ) -> None:
        """Record that no candidate matched the tenant key."""
        ...

    def ambiguous_tenant_key(
        self, capability: str, tenant_key: str, matches: list[str]
    ) -> None:
        """Record that several candidates matched; the first one was used."""
        ...

    def empty_tenant_key_rejected(self, capability: str) -> None:
        """Record that an empty tenant key was refused by policy."""
        ...

    def with_context(self, context: ObservationContext) -> TenantResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantResolverProbe:
    """Default implementation of TenantResolverProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTenantResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantResolverProbe(logger=self._logger, context=context)

    def tenant_resolved(
        self, capability: str, tenant_key: str, implementation: str
    ) -> None:
        """Record that a tenant key resolved to an implementation."""
        self._logger.debug(
            "tenant_implementation_resolved",
            capability=capability,
            tenant_key=tenant_key,
            implementation=implementation,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(
        self, capability: str, tenant_key: str, candidate_count: int
    ) -> None:
        """Record that no candidate matched the tenant key."""
        self._logger.info(
            "tenant_implementation_not_found",
            capability=capability,
            tenant_key=tenant_key,
            candidate_count=candidate_count,
            **self._get_context_kwargs(),
        )

    def ambiguous_tenant_key(
        self, capability: str, tenant_key: str, matches: list[str]
    ) -> None:
        """Record that several candidates matched; the first one was used."""
        self._logger.warning(
            "tenant_key_ambiguous",
            capability=capability,
            tenant_key=tenant_key,
            matches=matches,
            selected=matches[0] if matches else None,
            **self._get_context_kwargs(),
        )

    def empty_tenant_key_rejected(self, capability: str) -> None:
        """Record that an empty tenant key was refused by policy."""
        self._logger.info(
            "tenant_key_empty_rejected",
            capability=capability,
            **self._get_context_kwargs(),
        )
