"""Observability for tenancy application operations."""

from tenancy.application.observability.candidate_registry_probe import (
    CandidateRegistryProbe,
    DefaultCandidateRegistryProbe,
)
from tenancy.application.observability.tenant_resolver_probe import (
    DefaultTenantResolverProbe,
    TenantResolverProbe,
)

__all__ = [
    "CandidateRegistryProbe",
    "DefaultCandidateRegistryProbe",
    "DefaultTenantResolverProbe",
    "TenantResolverProbe",
]
