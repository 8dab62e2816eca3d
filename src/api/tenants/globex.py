"""Globex tenant implementations."""

from __future__ import annotations

from tenancy.domain.value_objects import TenantProfile
from tenancy.ports.capabilities import TenantProfileService


class GlobexProfileService(TenantProfileService):
    def get_profile(self) -> TenantProfile:
        return TenantProfile(
            tenant="Globex",
            display_name="Globex Corporation",
            currency="GBP",
            locale="en-GB",
        )
