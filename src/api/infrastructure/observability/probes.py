"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ServiceScopeProbe(Protocol):
    """Domain probe for service container and scope observability.

    This probe captures lifecycle events of container-managed services
    without exposing logging implementation details.
    """

    def service_registered(self, service_type: str, lifetime: str) -> None:
        """Record that a service was registered with the container."""
        ...

    def scope_opened(self, scope_id: int) -> None:
        """Record that a new service scope was opened."""
        ...

    def service_constructed(
        self, service_type: str, implementation: str, lifetime: str
    ) -> None:
        """Record that the container constructed a service instance."""
        ...

    def service_disposal_failed(self, implementation: str, error: Exception) -> None:
        """Record that closing a scoped instance raised."""
        ...

    def scope_closed(self, scope_id: int, disposed_count: int) -> None:
        """Record that a service scope was closed."""
        ...

    def with_context(self, context: ObservationContext) -> ServiceScopeProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultServiceScopeProbe:
    """Default implementation of ServiceScopeProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultServiceScopeProbe:
        """Create a new probe with observation context bound."""
        return DefaultServiceScopeProbe(logger=self._logger, context=context)

    def service_registered(self, service_type: str, lifetime: str) -> None:
        """Record that a service was registered with the container."""
        self._logger.debug(
            "service_registered",
            service_type=service_type,
            lifetime=lifetime,
            **self._get_context_kwargs(),
        )

    def scope_opened(self, scope_id: int) -> None:
        """Record that a new service scope was opened."""
        self._logger.debug(
            "service_scope_opened",
            scope_id=scope_id,
            **self._get_context_kwargs(),
        )

    def service_constructed(
        self, service_type: str, implementation: str, lifetime: str
    ) -> None:
        """Record that the container constructed a service instance."""
        self._logger.debug(
            "service_constructed",
            service_type=service_type,
            implementation=implementation,
            lifetime=lifetime,
            **self._get_context_kwargs(),
        )

    def service_disposal_failed(self, implementation: str, error: Exception) -> None:
        """Record that closing a scoped instance raised."""
        self._logger.error(
            "service_disposal_failed",
            implementation=implementation,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def scope_closed(self, scope_id: int, disposed_count: int) -> None:
        """Record that a service scope was closed."""
        self._logger.debug(
            "service_scope_closed",
            scope_id=scope_id,
            disposed_count=disposed_count,
            **self._get_context_kwargs(),
        )
