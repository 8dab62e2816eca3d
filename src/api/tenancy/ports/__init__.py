"""Tenancy ports (interfaces) module.

Ports define the contracts between the application layer and infrastructure.
They allow for dependency inversion, enabling the resolver to remain
independent of a specific lifecycle manager.
"""

from tenancy.ports.capabilities import TenantProfileService
from tenancy.ports.exceptions import (
    DuplicateCapabilityRegistrationError,
    TenantImplementationNotFoundError,
)
from tenancy.ports.services import ServiceProvider, ServiceRegistrar

__all__ = [
    "DuplicateCapabilityRegistrationError",
    "ServiceProvider",
    "ServiceRegistrar",
    "TenantImplementationNotFoundError",
    "TenantProfileService",
]
