"""Presentation layer for the Tenancy bounded context."""
