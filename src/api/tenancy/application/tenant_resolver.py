"""Tenant-scoped service resolution.

Maps a tenant key to the first candidate whose display name contains it
and asks the scope's service provider for a live instance. The resolver
holds no mutable state: it is a pure function of the frozen registry and
the tenant key, plus the delegated construction.
"""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar, cast

from tenancy.application.candidate_registry import CandidateRegistry
from tenancy.application.observability import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)
from tenancy.domain.value_objects import CandidateDescriptor, EmptyTenantKeyPolicy
from tenancy.ports.exceptions import TenantImplementationNotFoundError
from tenancy.ports.services import ServiceProvider

T = TypeVar("T")


def matching_candidates(
    candidates: Sequence[CandidateDescriptor],
    tenant_key: str,
    empty_key_policy: EmptyTenantKeyPolicy = EmptyTenantKeyPolicy.NOT_FOUND,
) -> list[CandidateDescriptor]:
    """All candidates a tenant key matches, in registration order.

    An empty key matches every candidate under WILDCARD and none under
    NOT_FOUND.
    """
    if tenant_key == "" and empty_key_policy is EmptyTenantKeyPolicy.NOT_FOUND:
        return []
    return [d for d in candidates if d.matches(tenant_key)]


def select_candidate(
    candidates: Sequence[CandidateDescriptor],
    tenant_key: str,
    empty_key_policy: EmptyTenantKeyPolicy = EmptyTenantKeyPolicy.NOT_FOUND,
) -> CandidateDescriptor | None:
    """Pick the candidate for a tenant key.

    The first candidate, in registration order, whose display name
    contains tenant_key (case-sensitive) wins.

    Returns:
        The selected descriptor, or None when nothing matches.
    """
    matches = matching_candidates(candidates, tenant_key, empty_key_policy)
    return matches[0] if matches else None


class TenantResolver:
    """Resolves capabilities to tenant-specific implementations.

    One resolver is bound to one service provider (normally the current
    request's scope); instances it returns are owned by that provider.

    Example:
        with container.create_scope() as scope:
            resolver = TenantResolver(registry=registry, provider=scope)
            service = resolver.resolve(TenantProfileService, "Acme")
    """

    def __init__(
        self,
        registry: CandidateRegistry,
        provider: ServiceProvider,
        empty_key_policy: EmptyTenantKeyPolicy = EmptyTenantKeyPolicy.NOT_FOUND,
        probe: TenantResolverProbe | None = None,
    ):
        self._registry = registry
        self._provider = provider
        self._empty_key_policy = empty_key_policy
        self._probe = probe or DefaultTenantResolverProbe()

    @property
    def empty_key_policy(self) -> EmptyTenantKeyPolicy:
        return self._empty_key_policy

    def resolve(self, capability: type[T], tenant_key: str) -> T:
        """Get the tenant's implementation of a capability.

        Args:
            capability: The capability class registered at startup.
            tenant_key: Opaque tenant key; any string is accepted.

        Returns:
            An instance of the selected implementation, owned by the
            provider's scope.

        Raises:
            TypeError: If tenant_key is not a string.
            TenantImplementationNotFoundError: If no candidate matches, the
                capability was never registered, or an empty key is
                refused by policy.
        """
        if not isinstance(tenant_key, str):
            raise TypeError(
                f"tenant_key must be a str, got {type(tenant_key).__name__}"
            )

        capability_name = capability.__qualname__
        candidates = self._registry.candidates_for(capability)

        if tenant_key == "" and self._empty_key_policy is EmptyTenantKeyPolicy.NOT_FOUND:
            self._probe.empty_tenant_key_rejected(capability=capability_name)
            raise TenantImplementationNotFoundError(capability, tenant_key)

        matches = matching_candidates(candidates, tenant_key, self._empty_key_policy)
        if not matches:
            self._probe.tenant_not_found(
                capability=capability_name,
                tenant_key=tenant_key,
                candidate_count=len(candidates),
            )
            raise TenantImplementationNotFoundError(capability, tenant_key)

        if len(matches) > 1 and tenant_key != "":
            self._probe.ambiguous_tenant_key(
                capability=capability_name,
                tenant_key=tenant_key,
                matches=[d.display_name for d in matches],
            )

        selected = matches[0]
        instance = self._provider.get_service(selected.concrete_type)
        self._probe.tenant_resolved(
            capability=capability_name,
            tenant_key=tenant_key,
            implementation=selected.concrete_type.__qualname__,
        )
        return cast(T, instance)

    def services_for(self, capability: type[T]) -> TenantServices[T]:
        """Bind this resolver to one capability."""
        return TenantServices(resolver=self, capability=capability)


class TenantServices(Generic[T]):
    """Keyed factory for one capability: call it with a tenant key.

    Lets request code depend on "the capability, per tenant" without
    holding the capability type itself.
    """

    def __init__(self, resolver: TenantResolver, capability: type[T]):
        self._resolver = resolver
        self._capability = capability

    @property
    def capability(self) -> type[T]:
        return self._capability

    def __call__(self, tenant_key: str) -> T:
        return self._resolver.resolve(self._capability, tenant_key)
