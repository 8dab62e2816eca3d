"""Infrastructure layer for the Tenancy bounded context."""

from tenancy.infrastructure.module_scanner import scan_candidate_types

__all__ = ["scan_candidate_types"]
