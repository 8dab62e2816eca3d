"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that a resolution can be correlated with
    the request that triggered it. Event-specific values such as the
    tenant key or capability are passed to the probe methods themselves
    and must not be bound here.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        tenant_source: Where the request's tenant key came from
            ("header" or "default").
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", tenant_source="header")
        probe = DefaultTenantResolverProbe().with_context(context)
    """

    request_id: str | None = None
    tenant_source: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.tenant_source is not None:
            result["tenant_source"] = self.tenant_source
        result.update(self.extra)
        return result

    def with_request(self, request_id: str) -> ObservationContext:
        """Create a new context with the request id set."""
        return ObservationContext(
            request_id=request_id,
            tenant_source=self.tenant_source,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            tenant_source=self.tenant_source,
            extra=new_extra,
        )
