"""Lifecycle manager ports for the Tenancy bounded context.

These protocols describe the object-lifecycle manager the resolver
delegates construction to, without tying the application layer to a
concrete container.
"""

from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class ServiceProvider(Protocol):
    """Produces instances by runtime type within the current scope.

    The provider owns the lifetime of every instance it returns.
    """

    def get_service(self, service_type: type[T]) -> T:
        """Get an instance of service_type for the current scope."""
        ...


class ServiceRegistrar(Protocol):
    """Accepts service registrations at composition time."""

    def is_registered(self, service_type: type) -> bool:
        """Check whether a service type already has a registration."""
        ...

    def add_scoped(self, service_type: type[T]) -> object:
        """Register service_type with one instance per scope."""
        ...
