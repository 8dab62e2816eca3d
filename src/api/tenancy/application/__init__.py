"""Application layer for the Tenancy bounded context.

Contains the candidate registry, the tenant resolver and the
registration API used by composition code.
"""

from tenancy.application.candidate_registry import (
    CandidateRegistry,
    CandidateRegistryBuilder,
    build_candidates,
    satisfies_capability,
)
from tenancy.application.registration import (
    add_scoped_candidate,
    add_scoped_dynamic,
)
from tenancy.application.tenant_resolver import (
    TenantResolver,
    TenantServices,
    matching_candidates,
    select_candidate,
)

__all__ = [
    "CandidateRegistry",
    "CandidateRegistryBuilder",
    "TenantResolver",
    "TenantServices",
    "add_scoped_candidate",
    "add_scoped_dynamic",
    "build_candidates",
    "matching_candidates",
    "satisfies_capability",
    "select_candidate",
]
