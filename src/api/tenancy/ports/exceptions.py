"""Domain exceptions for Tenancy bounded context.

These exceptions represent domain-level errors that can occur while
registering or resolving tenant implementations. They should be caught
and handled by the presentation layer.
"""


class TenantImplementationNotFoundError(LookupError):
    """Raised when no implementation is registered for the requested tenant.

    Covers a tenant key that matches no candidate display name, a
    capability that was never registered, and an empty key rejected by
    the empty-key policy. Callers get one failure shape for all three.
    """

    def __init__(self, capability: type, tenant_key: str):
        super().__init__(
            f"No {capability.__qualname__} implementation found "
            f"for tenant '{tenant_key}'"
        )
        self.capability = capability
        self.tenant_key = tenant_key


class DuplicateCapabilityRegistrationError(Exception):
    """Raised when candidates for a capability are registered a second time.

    Each capability must be registered exactly once per process; a second
    registration indicates a composition bug at startup.
    """

    def __init__(self, capability: type):
        super().__init__(
            f"Candidates for {capability.__qualname__} are already registered"
        )
        self.capability = capability
