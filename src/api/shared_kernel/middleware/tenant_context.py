"""Tenant context value object for the tenant key of the current request.

This module contains the pure value object that represents the tenant
key a request is routed by. It is framework-agnostic and contains no
business logic, making it safe for the shared kernel.

The extraction logic (header lookup, default tenant fallback) lives in
the tenancy bounded context's dependency layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class TenantContext:
    """Tenant context for the current request.

    The tenant key is opaque: it is never validated here, only matched
    later against candidate display names.

    Attributes:
        tenant_key: The tenant key exactly as supplied (may be empty).
        source: How the key was obtained - 'header' if from X-Tenant-ID,
            'default' if the configured default tenant key was used.
    """

    tenant_key: str
    source: Literal["header", "default"]
