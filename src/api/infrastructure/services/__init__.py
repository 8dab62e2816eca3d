"""Service container infrastructure - object lifecycle management."""

from infrastructure.services.container import (
    ServiceContainer,
    ServiceLifetime,
    ServiceRegistration,
    ServiceScope,
)
from infrastructure.services.exceptions import (
    ServiceConstructionError,
    ServiceContainerError,
    ServiceNotRegisteredError,
)

__all__ = [
    "ServiceConstructionError",
    "ServiceContainer",
    "ServiceContainerError",
    "ServiceLifetime",
    "ServiceNotRegisteredError",
    "ServiceRegistration",
    "ServiceScope",
]
