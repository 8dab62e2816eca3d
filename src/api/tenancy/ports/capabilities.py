"""Capabilities with tenant-specific implementations.

Each protocol here is a capability: implementations live in the tenant
candidate package and are picked per request by tenant key.
"""

from __future__ import annotations

from typing import Protocol

from tenancy.domain.value_objects import TenantProfile


class TenantProfileService(Protocol):
    """Provides the presentation profile of one tenant."""

    def get_profile(self) -> TenantProfile:
        """Get the tenant's profile."""
        ...
