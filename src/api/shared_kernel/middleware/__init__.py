"""Shared middleware for cross-cutting concerns.

This module contains the request-level value objects and probes that are
shared across bounded contexts. The tenant context is the primary
component, carrying the tenant key taken from request headers.
"""
