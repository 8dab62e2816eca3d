"""Tenant-specific implementations.

Every class defined in this package is a candidate for tenant dispatch.
The class name is the display name a tenant key is matched against, so
names must be chosen so that tenant keys do not overlap unintentionally.
"""
