"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .admin_client_protocol import AdminPayoutClientProtocol

__all__ = ["AdminPayoutClientProtocol"]
