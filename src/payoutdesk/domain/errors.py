"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class PayoutDeskError(Exception):
    """Base class for every error raised by payoutdesk."""


class RejectionReason(str, Enum):
    """Why a payout draft cannot be submitted."""

    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    INVALID_AMOUNT = "InvalidAmount"
    INCOMPLETE_PERIOD = "IncompletePeriod"
    INVALID_PERIOD_ORDER = "InvalidPeriodOrder"
    FUTURE_PERIOD_END = "FuturePeriodEnd"
    NETWORK_WALLET_NOT_CONFIGURED = "NetworkWalletNotConfigured"


class PayoutValidationError(PayoutDeskError):
    """Raised when a payout draft fails client-side validation."""

    def __init__(self, reason: RejectionReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message


class ApiError(PayoutDeskError):
    """Raised by the HTTP layer for non-successful responses or transport failures."""

    def __init__(
        self, message: str, status: int = 0, code: Optional[str] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class CommandError(ApiError):
    """Raised when the payout service rejects a create or delete command."""

    @classmethod
    def from_api_error(cls, error: ApiError) -> "CommandError":
        return cls(error.message, status=error.status, code=error.code)


class QueryError(ApiError):
    """Raised when a read against the payout service fails."""

    @classmethod
    def from_api_error(cls, error: ApiError) -> "QueryError":
        return cls(error.message, status=error.status, code=error.code)


class StaleResponseError(PayoutDeskError):
    """Raised to the caller of a read that was superseded by a newer request."""


class CommandInFlightError(PayoutDeskError):
    """Raised when a command is triggered while the same command is pending."""


class DeleteNotAllowedError(PayoutDeskError):
    """Raised when deletion is requested for a payout that cannot be deleted."""


class UnknownPayoutStatusError(PayoutDeskError):
    """Raised when a payout carries a status outside the known lifecycle."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Unknown payout status: {status!r}")
        self.status = status
