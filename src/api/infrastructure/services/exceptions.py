"""Service container exceptions."""


class ServiceContainerError(Exception):
    """Base exception for service container operations."""

    pass


class ServiceNotRegisteredError(ServiceContainerError, LookupError):
    """Raised when a service type was never registered with the container."""

    def __init__(self, service_type: type):
        super().__init__(f"No service registered for {service_type.__qualname__}")
        self.service_type = service_type


class ServiceConstructionError(ServiceContainerError):
    """Raised when the container cannot build a service's constructor arguments."""

    def __init__(self, message: str, implementation: type):
        super().__init__(message)
        self.implementation = implementation
