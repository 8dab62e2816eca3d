"""Domain probe for candidate registry construction.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events while tenant candidates are discovered and
the registry is frozen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CandidateRegistryProbe(Protocol):
    """Domain probe for candidate registry operations."""

    def candidate_registered(
        self, capability: str, implementation: str, display_name: str
    ) -> None:
        """Record that a class was accepted as a candidate for a capability."""
        ...

    def candidate_skipped(self, capability: str, type_name: str) -> None:
        """Record that a pool entry does not satisfy the capability."""
        ...

    def capability_without_candidates(self, capability: str) -> None:
        """Record that a capability was registered with no candidates."""
        ...

    def registry_built(self, capability_count: int, candidate_count: int) -> None:
        """Record that the registry was frozen."""
        ...

    def with_context(self, context: ObservationContext) -> CandidateRegistryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCandidateRegistryProbe:
    """Default implementation of CandidateRegistryProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultCandidateRegistryProbe:
        """Create a new probe with observation context bound."""
        return DefaultCandidateRegistryProbe(logger=self._logger, context=context)

    def candidate_registered(
        self, capability: str, implementation: str, display_name: str
    ) -> None:
        """Record that a class was accepted as a candidate for a capability."""
        self._logger.debug(
            "tenant_candidate_registered",
            capability=capability,
            implementation=implementation,
            display_name=display_name,
            **self._get_context_kwargs(),
        )

    def candidate_skipped(self, capability: str, type_name: str) -> None:
        """Record that a pool entry does not satisfy the capability."""
        self._logger.debug(
            "tenant_candidate_skipped",
            capability=capability,
            type_name=type_name,
            **self._get_context_kwargs(),
        )

    def capability_without_candidates(self, capability: str) -> None:
        """Record that a capability was registered with no candidates."""
        self._logger.warning(
            "capability_without_candidates",
            capability=capability,
            message="No tenant can be resolved for this capability",
            **self._get_context_kwargs(),
        )

    def registry_built(self, capability_count: int, candidate_count: int) -> None:
        """Record that the registry was frozen."""
        self._logger.info(
            "candidate_registry_built",
            capability_count=capability_count,
            candidate_count=candidate_count,
            **self._get_context_kwargs(),
        )
