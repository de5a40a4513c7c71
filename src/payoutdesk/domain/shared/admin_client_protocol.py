"""Protocol interface for admin payout API client implementations.

This protocol defines the contract that all admin payout client implementations
must satisfy. It lets the readers and the command service run against the
HTTP client in production and an in-memory fake in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol, Type, TYPE_CHECKING
from types import TracebackType

if TYPE_CHECKING:
    # Avoid circular imports by only importing types during type checking
    from ...application.dtos import (
        CreatePayoutRequest,
        MerchantFilter,
        MerchantPage,
        PayoutFilter,
        PayoutPage,
    )
    from ..entities import Payout, PayoutStats


class AdminPayoutClientProtocol(Protocol):
    """Protocol defining the interface for admin payout API clients.

    Implementations raise ``ApiError`` for any non-successful response;
    callers translate it into ``QueryError`` or ``CommandError``.
    """

    # Queries

    async def get_payout_stats(self) -> "PayoutStats":
        """Get platform-wide payout totals."""
        ...

    async def list_payout_merchants(self, filters: "MerchantFilter") -> "MerchantPage":
        """List merchants with outstanding earnings.

        Args:
            filters: Pagination and optional search/minimum amount

        Returns:
            One page of merchant aggregates, in server order
        """
        ...

    async def list_payouts(self, filters: "PayoutFilter") -> "PayoutPage":
        """List historical payouts.

        Args:
            filters: Pagination and optional search/network/status/period

        Returns:
            One page of payouts, in server order
        """
        ...

    async def get_payout(self, payout_id: str) -> "Payout":
        """Get a single payout by ID."""
        ...

    # Commands

    async def create_payout(self, request: "CreatePayoutRequest") -> "Payout":
        """Create a payout from a validated request.

        Returns:
            The created payout record
        """
        ...

    async def delete_payout(self, payout_id: str) -> None:
        """Delete a pending payout."""
        ...

    # Context Manager Support

    async def aclose(self) -> None:
        """Close the client and release resources."""
        ...

    async def __aenter__(
        self: "AdminPayoutClientProtocol",
    ) -> "AdminPayoutClientProtocol":
        ...

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        ...
