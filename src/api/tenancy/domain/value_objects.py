"""Domain value objects for the Tenancy bounded context.

These are immutable data structures that represent domain concepts
within the Tenancy context. They have no identity - equality is based
on their attribute values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EmptyTenantKeyPolicy(str, Enum):
    """How an empty tenant key is resolved.

    Every display name contains the empty string, so without a policy an
    empty key silently selects the first registered candidate.
    """

    NOT_FOUND = "not_found"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class CandidateDescriptor:
    """One concrete implementation eligible to satisfy a capability.

    Attributes:
        concrete_type: The implementation class (never the capability itself).
        display_name: Name matched against tenant keys by substring
            containment. Defaults to the class name at registration.
    """

    concrete_type: type
    display_name: str

    @classmethod
    def for_type(cls, concrete_type: type, display_name: str | None = None) -> CandidateDescriptor:
        """Describe a class, using its __name__ unless a display name is given."""
        return cls(
            concrete_type=concrete_type,
            display_name=concrete_type.__name__ if display_name is None else display_name,
        )

    def matches(self, tenant_key: str) -> bool:
        """Case-sensitive substring match of the tenant key."""
        return tenant_key in self.display_name


class TenantProfile(BaseModel):
    """Tenant-specific presentation settings returned by profile services."""

    model_config = ConfigDict(frozen=True)

    tenant: str = Field(..., description="Tenant key this profile belongs to")
    display_name: str = Field(..., description="Human-readable tenant name")
    currency: str = Field(..., description="ISO 4217 currency code")
    locale: str = Field(..., description="BCP 47 locale tag")
