"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def candidate_package_scanned(self, package: str, type_count: int) -> None:
        """Record that the tenant candidate package was scanned."""
        ...

    def tenancy_runtime_initialized(
        self, capability_count: int, candidate_count: int
    ) -> None:
        """Record that the candidate registry was built and frozen."""
        ...

    def tenancy_runtime_initialization_failed(self, error: Exception) -> None:
        """Record that building the tenancy runtime failed."""
        ...

    def application_shutdown(self) -> None:
        """Record that the application is shutting down."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def candidate_package_scanned(self, package: str, type_count: int) -> None:
        """Record that the tenant candidate package was scanned."""
        self._logger.info(
            "candidate_package_scanned",
            package=package,
            type_count=type_count,
            **self._get_context_kwargs(),
        )

    def tenancy_runtime_initialized(
        self, capability_count: int, candidate_count: int
    ) -> None:
        """Record that the candidate registry was built and frozen."""
        self._logger.info(
            "tenancy_runtime_initialized",
            capability_count=capability_count,
            candidate_count=candidate_count,
            **self._get_context_kwargs(),
        )

    def tenancy_runtime_initialization_failed(self, error: Exception) -> None:
        """Record that building the tenancy runtime failed."""
        self._logger.error(
            "tenancy_runtime_initialization_failed",
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def application_shutdown(self) -> None:
        """Record that the application is shutting down."""
        self._logger.info(
            "application_shutdown",
            **self._get_context_kwargs(),
        )
