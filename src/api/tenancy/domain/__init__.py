"""Tenancy domain module.

Contains value objects for the Tenancy bounded context.
"""

from tenancy.domain.value_objects import (
    CandidateDescriptor,
    EmptyTenantKeyPolicy,
    TenantProfile,
)

__all__ = [
    "CandidateDescriptor",
    "EmptyTenantKeyPolicy",
    "TenantProfile",
]
