"""HTTP routes for Tenancy bounded context.

Exposes tenant-dispatched services to clients that identify their tenant
with the X-Tenant-ID header.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from tenancy.application import CandidateRegistry
from tenancy.dependencies import get_candidate_registry, get_tenant_profile_service
from tenancy.domain.value_objects import TenantProfile
from tenancy.ports.capabilities import TenantProfileService

router = APIRouter(prefix="/tenants", tags=["tenants"])


class CapabilityCandidates(BaseModel):
    """Candidates registered for one capability."""

    capability: str = Field(..., description="Capability name")
    candidates: list[str] = Field(
        default_factory=list,
        description="Candidate display names in resolution order",
    )


@router.get("/profile")
def get_tenant_profile(
    service: Annotated[TenantProfileService, Depends(get_tenant_profile_service)],
) -> TenantProfile:
    """Get the profile of the tenant named by the X-Tenant-ID header.

    Raises:
        HTTPException: 400 if the header is missing and no default tenant
            is configured; 404 if no implementation matches the tenant.
    """
    return service.get_profile()


@router.get("/candidates")
def list_candidates(
    registry: Annotated[CandidateRegistry, Depends(get_candidate_registry)],
) -> list[CapabilityCandidates]:
    """List every capability and its candidates in resolution order."""
    return [
        CapabilityCandidates(
            capability=capability.__qualname__,
            candidates=[d.display_name for d in registry.candidates_for(capability)],
        )
        for capability in registry.capabilities
    ]
