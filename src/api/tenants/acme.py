"""Acme tenant implementations.

Definition order matters: the key "Acme" also matches
AcmeEuropeProfileService, and the earlier AcmeProfileService wins.
"""

from __future__ import annotations

from tenancy.domain.value_objects import TenantProfile
from tenancy.ports.capabilities import TenantProfileService


class AcmeProfileService(TenantProfileService):
    """Profile for the Acme head office."""

    def get_profile(self) -> TenantProfile:
        return TenantProfile(
            tenant="Acme",
            display_name="Acme Corporation",
            currency="USD",
            locale="en-US",
        )


class AcmeEuropeProfileService(TenantProfileService):
    """Profile for Acme's European subsidiary."""

    def get_profile(self) -> TenantProfile:
        return TenantProfile(
            tenant="AcmeEurope",
            display_name="Acme Europe GmbH",
            currency="EUR",
            locale="de-DE",
        )
