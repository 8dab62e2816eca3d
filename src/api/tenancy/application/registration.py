"""Composition-time registration of tenant-dispatched capabilities."""

from __future__ import annotations

from collections.abc import Iterable

from tenancy.application.candidate_registry import CandidateRegistryBuilder
from tenancy.domain.value_objects import CandidateDescriptor
from tenancy.ports.services import ServiceRegistrar


def add_scoped_dynamic(
    services: ServiceRegistrar,
    registry: CandidateRegistryBuilder,
    capability: type,
    types: Iterable[object],
) -> tuple[CandidateDescriptor, ...]:
    """Make a capability resolvable per tenant.

    Registers the capability's candidates from types with the registry
    builder, and registers every candidate class as a scoped service so
    the container builds at most one instance per request scope.

    Must be called once per capability, before the registry is built and
    before any resolution for that capability.

    Args:
        services: Container receiving the scoped registrations.
        registry: Builder collecting candidates.
        capability: The capability class.
        types: Candidate pool in discovery order.

    Returns:
        The candidates registered for the capability.

    Raises:
        DuplicateCapabilityRegistrationError: If called twice for a capability.
    """
    descriptors = registry.register(capability, types)
    for descriptor in descriptors:
        if not services.is_registered(descriptor.concrete_type):
            services.add_scoped(descriptor.concrete_type)
    return descriptors


def add_scoped_candidate(
    services: ServiceRegistrar,
    registry: CandidateRegistryBuilder,
    capability: type,
    implementation: type,
    display_name: str | None = None,
) -> CandidateDescriptor:
    """Add one explicit candidate for a capability and make it resolvable.

    The table-driven counterpart of add_scoped_dynamic: the candidate is
    appended after any scanned candidates, and its class is registered as
    a scoped service unless the container already knows it.

    Args:
        services: Container receiving the scoped registration.
        registry: Builder collecting candidates.
        capability: The capability class.
        implementation: Concrete class implementing the capability.
        display_name: Name matched against tenant keys; defaults to the
            class name.

    Returns:
        The registered candidate.

    Raises:
        TypeError: If implementation does not implement capability.
        ValueError: If implementation is already a candidate for it.
    """
    descriptor = registry.add_candidate(capability, implementation, display_name)
    if not services.is_registered(implementation):
        services.add_scoped(implementation)
    return descriptor
