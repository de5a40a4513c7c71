"""Test fixtures for in-memory implementations."""

from .in_memory_admin_client import InMemoryAdminPayoutClient

__all__ = ["InMemoryAdminPayoutClient"]
