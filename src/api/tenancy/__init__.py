"""Tenancy bounded context.

Resolves abstract capabilities to tenant-specific implementations at
request time, while the service container keeps governing instance
lifetimes per request scope.
"""
